"""Error hierarchy for the X-Ray client.

Construction-time failures (missing environment variables, bad daemon
addresses, malformed trace headers) raise these errors. Runtime failures
(sending a segment) are raised by clients as TransportError and are caught
by the session layer; they never reach traced code.
"""


class XRayError(Exception):
    """Base class for all X-Ray client errors."""

    pass


class MissingEnvVarError(XRayError):
    """Raised when a required environment variable is not set."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"missing environment variable: {name}")


class BadConfigError(XRayError):
    """Raised when configuration is present but unusable."""

    def __init__(self, message: str) -> None:
        super().__init__(f"bad configuration: {message}")


class HeaderParseError(XRayError, ValueError):
    """Raised when trace header text cannot be parsed."""

    pass


class TransportError(XRayError):
    """Raised when a segment cannot be encoded or sent to the daemon."""

    pass
