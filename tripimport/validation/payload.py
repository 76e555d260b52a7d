"""Rule-based gates for provider output.

Purpose:
    Decide whether the provider's generated value can be relayed to the caller as
    `{"items": [...]}`. Items themselves are opaque and pass through unmodified.

Validation model:
    - `parse_generated_payload`: JSON-decodes the generated text when it is a
      string; structured values are accepted as they are.
    - `require_items`: the decoded value must be an object whose `items` is a list.
    - `find_duplicate_locations`: optional post-check for venues repeated within
      one response (compared case- and whitespace-insensitively).

Failure handling:
    Failures raise `MalformedProviderPayload`; the provider's own reported success
    does not matter here.

Determinism:
    For the same input, output is deterministic. No I/O.
"""

import json
from typing import Any, List

from tripimport.core.errors import MalformedProviderPayload


INVALID_SHAPE_MESSAGE = "Invalid Gemini JSON shape"


def parse_generated_payload(value: Any) -> Any:
    """Decode generated text, tolerating an already structured value."""
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except ValueError as err:
        raise MalformedProviderPayload(str(err)) from err


def require_items(result: Any) -> List[Any]:
    """Return `result["items"]` or raise when the shape is wrong."""
    if not isinstance(result, dict) or not isinstance(result.get("items"), list):
        raise MalformedProviderPayload(INVALID_SHAPE_MESSAGE)
    return result["items"]


def _location_key(item: Any) -> str:
    if not isinstance(item, dict):
        return ""
    location = item.get("location")
    if not isinstance(location, str):
        return ""
    return " ".join(location.split()).lower()


def find_duplicate_locations(items: List[Any]) -> List[str]:
    """Return locations that occur more than once, in first-repeat order.

    Empty or missing locations never count as duplicates.
    """
    seen = set()
    duplicates: List[str] = []
    for item in items:
        key = _location_key(item)
        if not key:
            continue
        if key in seen and key not in duplicates:
            duplicates.append(key)
        seen.add(key)
    return duplicates


def reject_duplicate_locations(items: List[Any]) -> None:
    """Raise when any venue appears twice within one response."""
    duplicates = find_duplicate_locations(items)
    if duplicates:
        raise MalformedProviderPayload(
            "Duplicate locations in Gemini response: " + ", ".join(duplicates)
        )
