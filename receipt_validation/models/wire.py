"""
verifyReceipt wire envelopes.

NO DICTIONARIES - Request and response bodies are strongly typed models.
https://developer.apple.com/documentation/appstorereceipts/requestbody
https://developer.apple.com/documentation/appstorereceipts/responsebody
"""

from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from receipt_validation.exceptions import DateFormatError, DecodeError
from receipt_validation.models.enums import Environment
from receipt_validation.models.receipt import APP_STORE_DATE_ERROR, Receipt

ModelT = TypeVar("ModelT", bound=BaseModel)


class VerifyReceiptRequest(BaseModel):
    """POST /verifyReceipt request body. Built fresh for every validation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    receipt_data: str = Field(..., min_length=1, alias="receipt-data")
    password: str | None = None  # App-specific shared secret
    exclude_old_transactions: bool | None = Field(None, alias="exclude-old-transactions")

    def to_json(self) -> bytes:
        """Encode the body, omitting optional keys that are not set."""
        return self.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")

    @classmethod
    def from_json(cls, body: bytes | str) -> "VerifyReceiptRequest":
        """Decode a request body of the same shape."""
        return decode_body(cls, body)


class VerifyReceiptStatus(BaseModel):
    """The part of every response that is always present."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    status: int


class VerifyReceiptResponse(BaseModel):
    """Successful verifyReceipt response body."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    status: int
    receipt: Receipt
    latest_receipt: str | None = None  # Base64 receipt for subscriptions
    latest_receipt_info: Receipt | None = None
    is_retryable: bool | None = Field(None, alias="is-retryable")
    environment: Environment

    def is_sandbox(self) -> bool:
        """Check if Apple issued the receipt in the sandbox."""
        return self.environment is Environment.SANDBOX


def decode_body(model: type[ModelT], body: bytes | str) -> ModelT:
    """
    Decode a JSON body into a model.

    Raises:
        DateFormatError: If a date field is not a millisecond timestamp string
        DecodeError: If the body is not JSON or a field is missing or invalid
    """
    try:
        return model.model_validate_json(body)
    except ValidationError as exc:
        raise _to_decode_error(exc) from exc


def _to_decode_error(exc: ValidationError) -> DecodeError:
    """Report the first failing field by its wire path, e.g. ``receipt.in_app.0.product_id``."""
    error = exc.errors(include_url=False)[0]
    field = ".".join(str(part) for part in error["loc"]) or "body"

    if error["type"] == APP_STORE_DATE_ERROR:
        return DateFormatError(field, error["input"])
    if error["type"] == "missing":
        return DecodeError(field, "required field is missing")
    return DecodeError(field, error["msg"])
