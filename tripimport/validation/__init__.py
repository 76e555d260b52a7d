"""Validation package.

This package contains lightweight, rule-based gates the pipeline applies to
provider output before it is relayed to the caller: the `{"items": [...]}`
shape check and the optional duplicate-location check.
"""
