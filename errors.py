"""
Failure types for the diagnosis flow.

Every failure a submission can hit is a DiagnosisError subclass with a stable
`kind`, so the HTTP layer and the UI can render one message for all of them.
"""


class DiagnosisError(Exception):
    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(DiagnosisError):
    """API key missing or rejected, or the AI client could not be created."""
    kind = "configuration"


class TransportError(DiagnosisError):
    """Network or service failure while calling the AI provider."""
    kind = "transport"


class ParseError(DiagnosisError):
    """The sanitized model answer is not valid JSON."""
    kind = "parse"

    def __init__(self, detail: str):
        super().__init__(f"Gagal mengurai diagnosis: {detail}")
        self.detail = detail


class SchemaError(DiagnosisError):
    """Valid JSON, but not an object carrying a `diagnosis` value."""
    kind = "schema"

    def __init__(self, detail: str = "Format JSON tidak valid"):
        super().__init__(f"Gagal mengurai diagnosis: {detail}")
        self.detail = detail
