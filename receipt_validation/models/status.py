"""
verifyReceipt status codes.

Single source of truth for interpreting the ``status`` field of a response.
https://developer.apple.com/documentation/appstorereceipts/status
"""

from enum import Enum

SUCCESS_STATUS = 0


class ErrorKind(str, Enum):
    """Semantic classification of a non-zero verifyReceipt status."""

    INVALID_JSON_OBJECT = "invalid_json_object"
    RECEIPT_DATA_MALFORMED_OR_MISSING = "receipt_data_malformed_or_missing"
    RECEIPT_COULD_NOT_BE_AUTHENTICATED = "receipt_could_not_be_authenticated"
    SHARED_SECRET_MISMATCH = "shared_secret_mismatch"
    SERVER_UNAVAILABLE = "server_unavailable"
    SUBSCRIPTION_EXPIRED = "subscription_expired"
    WRONG_ENVIRONMENT_SANDBOX_RECEIPT_SENT_TO_PRODUCTION = (
        "wrong_environment_sandbox_receipt_sent_to_production"
    )
    WRONG_ENVIRONMENT_PRODUCTION_RECEIPT_SENT_TO_SANDBOX = (
        "wrong_environment_production_receipt_sent_to_sandbox"
    )
    RECEIPT_COULD_NOT_BE_AUTHORIZED = "receipt_could_not_be_authorized"
    INTERNAL_DATA_ACCESS_ERROR = "internal_data_access_error"
    UNKNOWN_ERROR = "unknown_error"

    @property
    def description(self) -> str:
        """Apple's explanation of the status."""
        return _DESCRIPTIONS[self]

    @property
    def is_wrong_environment(self) -> bool:
        """Check if the receipt belongs to the other environment."""
        return self in (
            ErrorKind.WRONG_ENVIRONMENT_SANDBOX_RECEIPT_SENT_TO_PRODUCTION,
            ErrorKind.WRONG_ENVIRONMENT_PRODUCTION_RECEIPT_SENT_TO_SANDBOX,
        )


_STATUS_KINDS: dict[int, ErrorKind] = {
    21000: ErrorKind.INVALID_JSON_OBJECT,
    21002: ErrorKind.RECEIPT_DATA_MALFORMED_OR_MISSING,
    21003: ErrorKind.RECEIPT_COULD_NOT_BE_AUTHENTICATED,
    21004: ErrorKind.SHARED_SECRET_MISMATCH,
    21005: ErrorKind.SERVER_UNAVAILABLE,
    21006: ErrorKind.SUBSCRIPTION_EXPIRED,
    21007: ErrorKind.WRONG_ENVIRONMENT_SANDBOX_RECEIPT_SENT_TO_PRODUCTION,
    21008: ErrorKind.WRONG_ENVIRONMENT_PRODUCTION_RECEIPT_SENT_TO_SANDBOX,
    21010: ErrorKind.RECEIPT_COULD_NOT_BE_AUTHORIZED,
}

_INTERNAL_DATA_ACCESS_RANGE = range(21100, 21200)

_DESCRIPTIONS: dict[ErrorKind, str] = {
    ErrorKind.INVALID_JSON_OBJECT: "The App Store could not read the JSON object you provided.",
    ErrorKind.RECEIPT_DATA_MALFORMED_OR_MISSING: (
        "The data in the receipt-data property was malformed or missing."
    ),
    ErrorKind.RECEIPT_COULD_NOT_BE_AUTHENTICATED: "The receipt could not be authenticated.",
    ErrorKind.SHARED_SECRET_MISMATCH: (
        "The shared secret you provided does not match the shared secret on file "
        "for your account."
    ),
    ErrorKind.SERVER_UNAVAILABLE: "The receipt server is not currently available.",
    ErrorKind.SUBSCRIPTION_EXPIRED: "This receipt is valid but the subscription has expired.",
    ErrorKind.WRONG_ENVIRONMENT_SANDBOX_RECEIPT_SENT_TO_PRODUCTION: (
        "This receipt is from the test environment, but it was sent to the production "
        "environment for verification."
    ),
    ErrorKind.WRONG_ENVIRONMENT_PRODUCTION_RECEIPT_SENT_TO_SANDBOX: (
        "This receipt is from the production environment, but it was sent to the test "
        "environment for verification."
    ),
    ErrorKind.RECEIPT_COULD_NOT_BE_AUTHORIZED: (
        "This receipt could not be authorized. Treat this the same as if a purchase "
        "was never made."
    ),
    ErrorKind.INTERNAL_DATA_ACCESS_ERROR: "Internal data access error.",
    ErrorKind.UNKNOWN_ERROR: "Unrecognized status code.",
}


def classify(status_code: int) -> ErrorKind | None:
    """
    Classify a verifyReceipt status code.

    Total over all integers: 0 yields None (success), codes outside the
    documented table yield UNKNOWN_ERROR.
    """
    if status_code == SUCCESS_STATUS:
        return None
    if status_code in _INTERNAL_DATA_ACCESS_RANGE:
        return ErrorKind.INTERNAL_DATA_ACCESS_ERROR
    return _STATUS_KINDS.get(status_code, ErrorKind.UNKNOWN_ERROR)
