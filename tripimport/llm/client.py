"""Gemini REST transport for paste-import requests.

Architectural role:
    Executes the single outbound `generateContent` call and exposes the raw
    provider reply plus helpers that locate the generated text in the reply
    envelope.

Model invocation flow:
    `engine.handle_paste_import` -> `send_request(payload, model=..., api_key=...)`
    -> `ProviderReply` -> `extract_generated_text(reply.text)`.

Retry behavior:
    No retry loop is implemented. Each call is attempted exactly once; the timeout
    is `provider_config.PROVIDER_TIMEOUT_SECONDS` (unbounded when unset).

Failure handling model:
    - Transport exceptions are raised as `ProviderUnreachable`.
    - Non-success statuses are NOT raised here: the reply is returned so the
      caller can apply its status-relay policy to the raw body.
    - Undecodable reply envelopes raise `MalformedProviderPayload`.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import requests

from tripimport.core.errors import MalformedProviderPayload, ProviderUnreachable
from tripimport.llm.provider_config import GEMINI_URL_TEMPLATE, PROVIDER_TIMEOUT_SECONDS


logger = logging.getLogger(__name__)


@dataclass
class ProviderReply:
    """Raw provider HTTP outcome."""

    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def build_request_url(model: str) -> str:
    """Return the `generateContent` endpoint for `model`."""
    return GEMINI_URL_TEMPLATE.format(model=model)


def send_request(
    payload: Dict[str, Any],
    *,
    model: str,
    api_key: str,
    post: Callable[..., Any] = requests.post,
    timeout: Optional[float] = PROVIDER_TIMEOUT_SECONDS,
) -> ProviderReply:
    """Send one `generateContent` request and return the raw reply.

    Args:
        payload: Provider body with `contents` and `generationConfig`.
        model: Gemini model identifier placed in the URL path.
        api_key: Credential sent as the `key` query parameter.
        post: HTTP POST callable with the `requests.post` signature.
        timeout: Seconds before the call is abandoned, or `None`.

    Returns:
        `ProviderReply` carrying status code and body text, whatever the status.

    Raises:
        ProviderUnreachable: Connection, TLS, or timeout failures.
    """
    url = build_request_url(model)

    try:
        response = post(
            url,
            params={"key": api_key},
            headers={"Content-Type": "application/json"},
            json=payload,
            timeout=timeout,
        )
    except requests.exceptions.RequestException as err:
        logger.warning("Gemini request to model=%s failed: %s", model, err.__class__.__name__)
        raise ProviderUnreachable(str(err) or "Gemini request failed") from err

    return ProviderReply(status_code=response.status_code, text=response.text or "")


def _first(value: Any) -> Any:
    if isinstance(value, list) and value:
        return value[0]
    return None


def extract_generated_text(raw: str) -> Any:
    """Locate `candidates[0].content.parts[0].text` in a reply envelope.

    Args:
        raw: Provider reply body.

    Returns:
        The generated value (usually a JSON string), or `""` when any step of
        the path is missing.

    Raises:
        MalformedProviderPayload: The envelope itself is not valid JSON.
    """
    try:
        envelope = json.loads(raw)
    except ValueError as err:
        raise MalformedProviderPayload(str(err)) from err

    candidate = _first(envelope.get("candidates")) if isinstance(envelope, dict) else None
    content = candidate.get("content") if isinstance(candidate, dict) else None
    part = _first(content.get("parts")) if isinstance(content, dict) else None
    text = part.get("text") if isinstance(part, dict) else None

    return "" if text is None else text
