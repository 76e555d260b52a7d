"""Paste-import request pipeline.

Architectural role:
    Provides the one execution path used by the HTTP and CLI layers to turn a
    paste-import call into a provider request and relay the provider's items back.
    Both deployment variants run through this pipeline; they differ only in the
    `PasteImportConfig` passed in.

Control-flow model:
    1. Method guard (POST only) -> `UnsupportedMethod`.
    2. Credential guard (explicit `api_key` argument) -> `MissingCredential`.
    3. Parse the caller body into `PasteImportRequest`.
    4. Build instruction + serialized envelope `contents` and `generationConfig`.
    5. One synchronous provider call through `llm.client.send_request`.
    6. Apply the variant's status-relay policy to non-success replies.
    7. Decode the nested generated text and gate the `{"items": [...]}` shape.
    8. Optional duplicate-location check, then relay items unmodified.

Error handling strategy:
    Every failure is a `PasteImportError` subclass, converted at the top level into
    a plain-text `AdapterResponse`. Any other exception is logged and reported as
    `UnexpectedFailure` carrying the exception message. Nothing is retried.

Side effects:
    The outbound provider call and log records. No state is kept between calls.

Determinism:
    For identical inputs and an identical provider reply, the response is identical.
"""

import json
import logging
import os
from typing import Any, Callable, Dict, List, Optional, Union

import requests

from tripimport.core.errors import (
    MissingCredential,
    PasteImportError,
    ProviderRejected,
    UnexpectedFailure,
    UnsupportedMethod,
)
from tripimport.core.types import AdapterResponse, PasteImportConfig, PasteImportRequest
from tripimport.llm.client import extract_generated_text, send_request
from tripimport.prompting.prompt_builder import (
    build_contents,
    build_generation_config,
    build_user_message,
)
from tripimport.validation.payload import (
    parse_generated_payload,
    reject_duplicate_locations,
    require_items,
)


logger = logging.getLogger(__name__)

# Caller bodies may contain personal trip data; logging them is opt-in.
DEBUG = os.getenv("DEBUG") == "true"

ALLOWED_METHOD = "POST"
PROVIDER_FAILURE_FALLBACK = "Gemini request failed"

Body = Union[None, bytes, str, Dict[str, Any]]


def parse_request_body(body: Body) -> PasteImportRequest:
    """Parse an inbound body into the request envelope.

    Args:
        body: Structured mapping, JSON text, or JSON bytes. A JSON text that
            decodes to a string is decoded a second
            time when that string is itself JSON.

    Returns:
        `PasteImportRequest` with every absent field defaulted.

    Edge cases:
        - `None` or blank bodies yield an all-default envelope.
        - Decoded values that are not objects yield an all-default envelope,
          including JSON string literals whose content is not itself JSON.

    Raises:
        UnexpectedFailure: The outer body is not decodable JSON.
    """
    data: Any = body
    try:
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        if isinstance(data, str):
            data = json.loads(data) if data.strip() else {}
    except ValueError as err:
        raise UnexpectedFailure(str(err)) from err

    if isinstance(data, str):
        try:
            data = json.loads(data)
        except ValueError:
            data = {}
    if not isinstance(data, dict):
        data = {}
    return PasteImportRequest.model_validate(data)


def build_provider_payload(config: PasteImportConfig, request: PasteImportRequest) -> Dict[str, Any]:
    """Assemble the `generateContent` body for one variant."""
    user_message = build_user_message(request, include_preferences=config.include_preferences)
    if DEBUG:
        logger.debug("Paste import %s envelope: %s", config.name, user_message)
    return {
        "contents": build_contents(config.instruction_text, user_message),
        "generationConfig": build_generation_config(config.temperature),
    }


def _import_items(
    method: str,
    body: Body,
    config: PasteImportConfig,
    api_key: Optional[str],
    post: Callable[..., Any],
) -> List[Any]:
    if (method or "").upper() != ALLOWED_METHOD:
        raise UnsupportedMethod(ALLOWED_METHOD)

    if not api_key:
        raise MissingCredential()

    request = parse_request_body(body)
    payload = build_provider_payload(config, request)

    reply = send_request(payload, model=config.model_id, api_key=api_key, post=post)

    if not reply.ok:
        status = reply.status_code if config.relay_provider_status else 500
        raise ProviderRejected(reply.text or PROVIDER_FAILURE_FALLBACK, status_code=status)

    generated = extract_generated_text(reply.text)
    items = require_items(parse_generated_payload(generated))

    if config.reject_duplicate_locations:
        reject_duplicate_locations(items)

    return items


def handle_paste_import(
    method: str,
    body: Body,
    *,
    config: PasteImportConfig,
    api_key: Optional[str],
    post: Callable[..., Any] = requests.post,
) -> AdapterResponse:
    """Run one paste-import call end to end.

    Args:
        method: Inbound HTTP method.
        body: Inbound body (mapping, JSON text, or JSON bytes).
        config: Variant configuration (instruction, model, temperature, policies).
        api_key: Provider credential resolved by the caller; falsy means missing.
        post: HTTP POST callable used for the provider call.

    Returns:
        `AdapterResponse` with 200 and `{"items": [...]}` on success, otherwise a
        plain-text diagnostic with the failure's status code and headers.
    """
    try:
        items = _import_items(method, body, config, api_key, post)
    except PasteImportError as err:
        if not isinstance(err, UnsupportedMethod):
            logger.warning(
                "Paste import %s failed: %s (status=%d)",
                config.name,
                err.__class__.__name__,
                err.status_code,
            )
        return AdapterResponse(status_code=err.status_code, content=err.message, headers=err.headers)
    except Exception as err:
        logger.exception("Paste import %s failed unexpectedly", config.name)
        failure = UnexpectedFailure(str(err) or err.__class__.__name__)
        return AdapterResponse(status_code=failure.status_code, content=failure.message)

    logger.info("Paste import %s returned %d items", config.name, len(items))
    return AdapterResponse(status_code=200, content={"items": items})
