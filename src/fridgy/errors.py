"""Error types raised by barcode lookups and request signing."""


class FridgyError(Exception):
    """Base class for all Fridgy errors."""


class InvalidBarcodeLengthError(FridgyError, ValueError):
    """Raised when a scanned code does not hold 8, 12 or 13 digits."""

    def __init__(self, length: int) -> None:
        super().__init__(f"Unsupported barcode length {length}")
        self.length = length


class MissingCredentialError(FridgyError):
    """Raised when signing is attempted without a complete credential."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Missing FatSecret credential: {field}")
        self.field = field


class ProviderError(FridgyError):
    """Raised when FatSecret rejects a request with an explicit error object."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"FatSecret error {code}: {message}")
        self.code = code
        self.message = message


class NetworkError(FridgyError):
    """Raised when the HTTP exchange fails or returns a non-2xx status."""

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


class LookupTimeoutError(NetworkError):
    """Raised when a lookup does not finish within its timeout."""

    def __init__(self, timeout_seconds: float) -> None:
        super().__init__(f"Lookup timed out after {timeout_seconds:g}s")
        self.timeout_seconds = timeout_seconds


class ParseError(FridgyError):
    """Raised when a response body is not the JSON shape we expect."""


class NotFoundError(FridgyError, LookupError):
    """Raised when a user-owned row does not exist for that user."""
