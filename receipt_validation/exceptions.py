"""
Exception Classes - Strongly typed exception hierarchy.

NO DICTIONARIES - All exceptions have typed attributes.
"""

from receipt_validation.models.status import ErrorKind


class ReceiptValidationError(Exception):
    """Base exception for all receipt validation errors."""

    pass


class TransportError(ReceiptValidationError):
    """Raised when the verifyReceipt endpoint cannot be reached or answers badly."""

    def __init__(self, message: str, url: str) -> None:
        self.message = message
        self.url = url
        super().__init__(f"Transport error calling {url}: {message}")


class TransportTimeoutError(TransportError):
    """Raised when a verifyReceipt attempt exceeds its deadline."""

    def __init__(self, url: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"no response within {timeout:g}s", url)


class DecodeError(ReceiptValidationError):
    """Raised when a verifyReceipt response body cannot be decoded."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"Could not decode {field}: {message}")


class DateFormatError(DecodeError):
    """Raised when an App Store date is not a millisecond timestamp string."""

    def __init__(self, field: str, value: object) -> None:
        self.value = value
        super().__init__(
            field, f"expected milliseconds since epoch as a decimal string, got {value!r}"
        )


class AppStoreStatusError(ReceiptValidationError):
    """Raised when verifyReceipt answers with a non-zero status."""

    def __init__(self, status_code: int, kind: ErrorKind) -> None:
        self.status_code = status_code
        self.kind = kind
        super().__init__(f"App Store status {status_code} ({kind.value}): {kind.description}")
