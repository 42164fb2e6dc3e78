"""
Error kinds surfaced by the pipelines, the consultant agent and its tools.

None of these are retried internally. They propagate to the immediate caller
(a route handler or a script) as a terminal failure of the current request.
"""


class KiraError(Exception):
    """Base exception for all Kira backend errors."""

    code = "internal_error"


class ExtractionFailed(KiraError):
    """Raised when the model returns nothing parseable for a source document."""

    code = "extraction_failed"


class CategorizationFailed(KiraError):
    """Raised when line items cannot be turned into carbon/GITA entries."""

    code = "categorization_failed"


class GenerationFailed(KiraError):
    """Raised when the model call itself errors or yields no usable output."""

    code = "generation_failed"


class MalformedOutput(KiraError):
    """Raised when schema-constrained model output fails to parse or validate."""

    code = "malformed_output"

    def __init__(self, message: str, raw_response: str | None = None) -> None:
        super().__init__(message)
        self.raw_response = raw_response


class IncompleteProfile(KiraError):
    """Raised when a tool runs against a user record missing required fields."""

    code = "incomplete_profile"


class InvalidInput(KiraError):
    """Raised when a request payload is well-formed JSON but unusable (e.g. bad base64)."""

    code = "validation_error"


class NotFound(KiraError):
    """Raised when a referenced asset or document does not exist."""

    code = "not_found"
