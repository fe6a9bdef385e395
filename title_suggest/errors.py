from typing import Any


class SuggestionError(Exception):
    """Base error for the suggestion pipeline; carries the HTTP status it maps to."""

    status_code: int = 500

    def __init__(self, message: str, raw: Any = None):
        super().__init__(message)
        self.message = message
        self.raw = raw

    def to_body(self) -> dict:
        body: dict = {"error": self.message}
        if self.raw is not None:
            body["raw"] = self.raw
        return body


class InvalidRequestError(SuggestionError):
    status_code = 400


class ConfigurationError(SuggestionError):
    status_code = 500


class UpstreamError(SuggestionError):
    status_code = 500


class MalformedOutputError(SuggestionError):
    status_code = 502

    def __init__(self, raw_text: str):
        super().__init__("Model returned non-JSON output", raw=raw_text)


class EmptyResultError(SuggestionError):
    status_code = 502

    def __init__(self, payload: Any):
        super().__init__("No titles produced", raw=payload)
