"""Failure taxonomy for the paste-import pipeline.

Every failure the pipeline can surface is one of these exception types. Each
carries the HTTP status code and the plain-text diagnostic that the caller
receives. `engine.handle_paste_import` raises them internally and converts them
into an `AdapterResponse` at its top level.

There is no structured error code in the response body: callers distinguish
failures by status code and message text only.
"""

from typing import Dict, Optional


class PasteImportError(Exception):
    """Base failure with a caller-facing status code and message."""

    status_code = 500

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.headers = dict(headers or {})


class UnsupportedMethod(PasteImportError):
    """Inbound call used a method other than POST."""

    status_code = 405

    def __init__(self, allowed: str = "POST"):
        super().__init__("Method Not Allowed", headers={"Allow": allowed})


class MissingCredential(PasteImportError):
    """Provider API key is absent at call time."""

    def __init__(self, variable: str = "GEMINI_API_KEY"):
        super().__init__(f"Missing {variable}")


class ProviderUnreachable(PasteImportError):
    """Transport-level failure talking to the provider."""


class ProviderRejected(PasteImportError):
    """Provider answered with a non-success status.

    The message is the provider's raw body; `status_code` is either 500 or the
    provider's own status, depending on the variant configuration.
    """


class MalformedProviderPayload(PasteImportError):
    """Provider envelope, generated text, or parsed result has the wrong shape."""


class UnexpectedFailure(PasteImportError):
    """Anything else, including malformed caller input."""
