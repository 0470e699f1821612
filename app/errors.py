"""
Error types raised while collecting preferences and generating recommendations.

Every pipeline failure is terminal for the current call and surfaces as exactly
one of the ``PipelineError`` subclasses below.
"""

from typing import Optional


def excerpt(text: Optional[str], limit: int = 200) -> str:
    """Shorten raw upstream text for inclusion in an error message."""
    if not text:
        return ""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


class PreferenceValidationError(ValueError):
    """User input was rejected at submission time."""


class MissingRequiredField(PreferenceValidationError):
    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Missing required field: {field}")


class PipelineError(Exception):
    """Base class for recommendation pipeline failures."""


class ConfigurationError(PipelineError):
    """The Gemini credential is missing or unusable."""


class NotInitialized(ConfigurationError):
    def __init__(self) -> None:
        super().__init__(
            "Gemini API is not initialized: no API key has been configured. "
            "Set GEMINI_API_KEY in the environment or .env file."
        )


class InvalidCredential(ConfigurationError):
    def __init__(self) -> None:
        super().__init__(
            "Gemini API key is empty or still a placeholder value. "
            "Check the GEMINI_API_KEY configuration."
        )


class UpstreamUnavailable(PipelineError):
    """All attempts to reach the completion endpoint failed."""

    def __init__(self, attempts: int, last_error: BaseException) -> None:
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Gemini API unavailable after {attempts} attempts: "
            f"{type(last_error).__name__}: {last_error}"
        )


class UpstreamRejected(PipelineError):
    """The completion endpoint refused the request; retrying will not help."""

    def __init__(self, code: Optional[int], message: str) -> None:
        self.code = code
        super().__init__(f"Gemini API rejected the request ({code}): {message}")


class UpstreamContractError(PipelineError):
    """The completion endpoint answered, but not with a usable payload."""

    def __init__(self, message: str, raw_excerpt: str = "") -> None:
        self.raw_excerpt = raw_excerpt
        if raw_excerpt:
            message = f"{message}: {raw_excerpt!r}"
        super().__init__(message)


class EmptyResponse(UpstreamContractError):
    def __init__(self) -> None:
        super().__init__("Gemini API returned an empty response")


class NoJsonFound(UpstreamContractError):
    def __init__(self, raw_excerpt: str) -> None:
        super().__init__("Failed to extract valid JSON from the response", raw_excerpt)


class MalformedJson(UpstreamContractError):
    def __init__(self, raw_excerpt: str, reason: str = "") -> None:
        self.reason = reason
        message = "Response JSON could not be parsed"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, raw_excerpt)


class InvalidShape(UpstreamContractError):
    def __init__(self, detail: str, raw_excerpt: str = "") -> None:
        self.detail = detail
        super().__init__(f"Response JSON has an unexpected shape: {detail}", raw_excerpt)
