"""Custom exceptions."""


class OracleError(Exception):
    """Base class for every failure the assistant can recover from."""


class ConfigError(OracleError):
    """Raised when configuration loading fails."""


class AuthenticationFailure(OracleError):
    """Raised when the API key is missing or rejected by the backend."""


class GenerationFailure(OracleError):
    """Raised when the backend returned no usable text or media."""


class OperationFailure(GenerationFailure):
    """Raised when a long-running video job failed or produced no result."""


class OperationTimeout(OperationFailure):
    """Raised when a video job exceeds its poll cap or deadline."""


class OperationCancelled(OperationFailure):
    """Raised when a video job is abandoned by its caller."""


class IOFailure(OracleError):
    """Raised when a local file cannot be read or written."""


class NetworkFailure(OracleError):
    """Raised on transport errors or unexpected HTTP statuses."""


class ToolInputError(OracleError):
    """Raised when a tool is invoked without the inputs it needs."""
