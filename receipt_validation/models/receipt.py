"""
Receipt Models - Pydantic models for the decoded verifyReceipt receipt.

NO DICTIONARIES - All data uses strongly typed models.

Wire keys follow Apple exactly, including ``cancellationDateMS`` whose casing
differs from its siblings. Models are populated by wire key only: Apple also
sends human-readable dates under keys such as ``purchase_date`` and
``cancellation_date``, which must not reach the millisecond fields.
https://developer.apple.com/documentation/appstorereceipts/responsebody/receipt
"""

from datetime import UTC, datetime
from typing import Annotated

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
)
from pydantic_core import PydanticCustomError

from receipt_validation.exceptions import DateFormatError
from receipt_validation.models.dates import decode_app_store_date, encode_app_store_date
from receipt_validation.models.enums import (
    CancellationReason,
    SubscriptionAutoRenewStatus,
    SubscriptionExpirationIntent,
    SubscriptionIntroductoryPricePeriod,
    SubscriptionPriceConsentStatus,
    SubscriptionRetryFlag,
    SubscriptionTrialPeriod,
)

# pydantic error type raised for malformed App Store dates
APP_STORE_DATE_ERROR = "app_store_date"


def _validate_app_store_date(value: object) -> datetime:
    if isinstance(value, datetime):
        return value
    try:
        return decode_app_store_date(value)
    except DateFormatError as exc:
        raise PydanticCustomError(APP_STORE_DATE_ERROR, "{reason}", {"reason": exc.message})


AppStoreDate = Annotated[
    datetime,
    BeforeValidator(_validate_app_store_date),
    PlainSerializer(encode_app_store_date, return_type=str),
]


class InAppPurchase(BaseModel):
    """One in-app purchase line item of a receipt.

    The subscription fields are only present for auto-renewable subscriptions;
    None means "not applicable", not "false".
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    quantity: str
    product_id: str
    transaction_id: str
    original_transaction_id: str
    purchase_date: AppStoreDate = Field(..., alias="purchase_date_ms")
    original_purchase_date: AppStoreDate = Field(..., alias="original_purchase_date_ms")

    # Auto-renewable subscription fields
    subscription_expiration_date: AppStoreDate | None = Field(
        None, alias="subscription_expiration_date_ms"
    )
    subscription_expiration_intent: SubscriptionExpirationIntent | None = Field(
        None, alias="expiration_intent"
    )
    subscription_retry_flag: SubscriptionRetryFlag | None = Field(
        None, alias="is_in_billing_retry_period"
    )
    subscription_trial_period: SubscriptionTrialPeriod | None = Field(
        None, alias="is_trial_period"
    )
    subscription_introductory_price_period: SubscriptionIntroductoryPricePeriod | None = Field(
        None, alias="is_in_intro_offer_period"
    )
    subscription_auto_renew_status: SubscriptionAutoRenewStatus | None = Field(
        None, alias="auto_renew_status"
    )
    subscription_auto_renew_product_id: str | None = Field(None, alias="auto_renew_product_id")
    subscription_price_consent_status: SubscriptionPriceConsentStatus | None = Field(
        None, alias="price_consent_status"
    )

    # Refunds and cancellations by Apple customer support
    cancellation_date: AppStoreDate | None = Field(None, alias="cancellationDateMS")
    cancellation_reason: CancellationReason | None = None

    # Production-only identifiers
    app_item_id: str | None = None
    external_version_identifier: str | None = Field(None, alias="version_external_identifier")
    web_order_line_item_id: str | None = None

    def is_subscription(self) -> bool:
        """Check if this line item is an auto-renewable subscription period."""
        return self.subscription_expiration_date is not None

    def is_cancelled(self) -> bool:
        """Check if Apple customer support cancelled (refunded) this purchase."""
        return self.cancellation_date is not None

    def is_expired(self, at: datetime | None = None) -> bool:
        """Check if the subscription period ended before ``at`` (default: now)."""
        if self.subscription_expiration_date is None:
            return False
        return self.subscription_expiration_date <= (at or datetime.now(UTC))


class Receipt(BaseModel):
    """Decoded App Store receipt. Immutable, produced only by decoding a response."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    bundle_id: str
    application_version: str
    original_application_version: str
    creation_date: AppStoreDate = Field(..., alias="receipt_creation_date_ms")
    expiration_date: AppStoreDate | None = Field(None, alias="receipt_expiration_date_ms")
    in_app: tuple[InAppPurchase, ...]

    def purchases_for(self, product_id: str) -> list[InAppPurchase]:
        """In-app purchases of one product, in the order Apple returned them."""
        return [purchase for purchase in self.in_app if purchase.product_id == product_id]
