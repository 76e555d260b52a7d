"""Core pipeline package.

Architectural role:
    Holds the paste-import request pipeline that sits between the API/CLI
    entrypoints and the prompting, validation, and LLM transport layers.

Composition:
    - `engine`: One parameterized request -> provider -> response pipeline.
    - `types`: Variant configuration record, request envelope, adapter response.
    - `errors`: Failure taxonomy mapped to HTTP status codes.

Determinism and side effects:
    Package import is side-effect free. The only runtime side effect is the
    outbound provider call issued by `engine`.
"""
