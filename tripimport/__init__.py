"""Trip paste-import service.

Forwards free-text trip-planning input to the Gemini `generateContent` REST API
and relays back a JSON array of structured trip items.

Package layout:
    - `core`: request pipeline, configuration record, request envelope, errors.
    - `prompting`: instruction texts and provider `contents` assembly.
    - `llm`: provider configuration and REST transport.
    - `validation`: provider payload gates.
    - `api`: HTTP (FastAPI) and terminal entrypoints.
"""
