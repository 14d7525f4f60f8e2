"""Transport error types."""


class TransportError(Exception):
    """Base error for proof transport issues."""


class SchemaError(TransportError):
    """Raised when a request body fails schema validation."""


class SizeLimitError(TransportError):
    """Raised when a request body exceeds the configured size limit."""
