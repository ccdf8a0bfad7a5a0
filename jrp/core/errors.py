"""Error taxonomy shared by the key, signing and HTTP layers."""

HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401
HTTP_SERVER_ERROR = 500


class ProviderError(Exception):
    """Base class for every failure the provider reports."""

    status_code: int = HTTP_SERVER_ERROR
    error_code: str = "server_error"


class ConfigurationError(ProviderError):
    """Key container unreadable, wrong store password or unsupported format."""


class KeyAccessError(ProviderError):
    """Alias missing, entry not a private key, or certificate absent."""


class SigningError(ProviderError):
    """The signing primitive rejected the key material."""


class AuthenticationError(ProviderError):
    """Missing or invalid Basic credentials."""

    status_code = HTTP_UNAUTHORIZED

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason

    @property
    def error_code(self) -> str:  # type: ignore[override]
        return self.reason


class ValidationError(ProviderError):
    """Request parameters the token endpoint does not accept."""

    status_code = HTTP_BAD_REQUEST

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason

    @property
    def error_code(self) -> str:  # type: ignore[override]
        return self.reason
