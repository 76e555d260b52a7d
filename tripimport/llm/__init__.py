"""LLM access package.

Architectural role:
    Provides provider configuration and the REST transport used by the core
    pipeline to invoke Gemini `generateContent`.

Module split:
    - `provider_config`: environment-driven endpoint, model, and variant settings
      plus credential lookup.
    - `client`: single-shot HTTP transport returning the raw provider reply.
"""
