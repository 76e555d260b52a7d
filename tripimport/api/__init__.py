"""Trip paste-import API adapter package.

Architectural role:
- Defines the external interaction boundary for HTTP and CLI interfaces.
- Resolves the credential and renders pipeline results for each transport.
- Delegates request handling to the core layer.

Scope:
- Transport concerns only. No prompt construction or model invocation logic is
  implemented in this package.
"""
