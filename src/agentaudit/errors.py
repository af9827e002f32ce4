"""Exception types raised across the audit pipeline."""


class AuditError(Exception):
    """Base class for all agentaudit errors."""


class FetchError(AuditError):
    """Fetching the risk dataset failed. Always fatal to the run."""


class NetworkError(FetchError):
    """Connection to the risk service could not be established or was dropped."""


class RequestTimeoutError(FetchError):
    """No response arrived before the request deadline."""

    def __init__(self, message: str = "Request timeout"):
        super().__init__(message)


class RedirectLimitError(FetchError):
    """The redirect chain was longer than allowed."""

    def __init__(self, max_redirects: int):
        self.max_redirects = max_redirects
        super().__init__(f"Too many redirects (max {max_redirects})")


class HttpError(FetchError):
    """The final response had a status other than 200."""

    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"HTTP {status}: {body}")


class ParseError(FetchError):
    """The response body was not valid JSON."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"JSON parse error: {detail}")


class ManifestParseError(AuditError):
    """A manifest file exists but could not be read or parsed."""

    def __init__(self, filename: str, detail: str):
        self.filename = filename
        self.detail = detail
        super().__init__(f"Failed to parse {filename}: {detail}")


class ConfigValidationError(AuditError):
    """A configuration value is outside its allowed set."""
