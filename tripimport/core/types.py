"""Data contracts for the paste-import pipeline.

Architectural role:
    Defines the variant configuration record consumed by `engine`, the caller
    request envelope, and the transport-neutral response handed back to the API
    and CLI layers.

Control-flow interaction:
    - `PasteImportConfig` selects instruction text, model, temperature, and the
      status-relay policy. One instance exists per deployment entry point.
    - `PasteImportRequest` is parsed from the inbound body and serialized back
      into the second provider `contents` part.
    - `AdapterResponse` is rendered by `tripimport.api.http_api` or printed by the CLI.

Determinism:
    All types are purely structural. Serialization of the request envelope keeps
    a fixed key order, so identical inputs always produce identical provider
    payloads.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


ITEM_KINDS = ("activity", "reminder", "checklist", "flight")


@dataclass(frozen=True)
class PasteImportConfig:
    """Per-entry-point pipeline settings.

    Attributes:
        name: Short label used in logs (`extract`, `plan`).
        instruction_text: Fixed instruction sent as the first `contents` part.
        model_id: Gemini model identifier placed in the request URL.
        temperature: Sampling temperature forwarded in `generationConfig`.
        relay_provider_status: When `True`, provider failures keep the provider's
            status code; otherwise they are reported as 500.
        include_preferences: Whether the serialized envelope carries the
            `preferences` key.
        reject_duplicate_locations: Enables the local duplicate-venue check on
            the returned items.
    """

    name: str
    instruction_text: str
    model_id: str
    temperature: float
    relay_provider_status: bool = False
    include_preferences: bool = False
    reject_duplicate_locations: bool = False


class PasteImportRequest(BaseModel):
    """Caller request envelope.

    Field values are opaque here: whatever the caller sends is forwarded to
    the provider unchanged. Explicit `null` values fall back to the field
    default.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    text: Any = ""
    facts: Any = Field(default_factory=dict)
    trip_context: Any = Field(default_factory=dict, alias="tripContext")
    preferences: Any = None
    existing_items: Any = Field(default_factory=list, alias="existingItems")

    @field_validator("text", mode="before")
    @classmethod
    def _default_text(cls, value):
        return "" if value is None else value

    @field_validator("facts", "trip_context", mode="before")
    @classmethod
    def _default_mapping(cls, value):
        return {} if value is None else value

    @field_validator("existing_items", mode="before")
    @classmethod
    def _default_sequence(cls, value):
        return [] if value is None else value

    def to_user_message(self, include_preferences: bool = False) -> str:
        """Serialize the envelope as compact JSON for the provider."""
        message: Dict[str, Any] = {
            "text": self.text,
            "facts": self.facts,
            "tripContext": self.trip_context,
        }
        if include_preferences:
            message["preferences"] = self.preferences
        message["existingItems"] = self.existing_items
        return json.dumps(message, ensure_ascii=False, separators=(",", ":"))


@dataclass
class AdapterResponse:
    """Transport-neutral pipeline result.

    `content` is a dict for JSON success bodies and a string for plain-text
    diagnostics.
    """

    status_code: int
    content: Union[Dict[str, Any], str]
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def is_json(self) -> bool:
        return isinstance(self.content, dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300
