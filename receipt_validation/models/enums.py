"""
App Store enumerations.

Apple encodes every flag in a receipt as a string ("0"/"1" or "true"/"false").
Each set is closed: a literal outside it fails decoding instead of falling back
to a default, and an absent field stays None rather than becoming "false".
"""

from enum import Enum


class Environment(str, Enum):
    """verifyReceipt environment, valued as Apple reports it in responses."""

    PRODUCTION = "Production"
    SANDBOX = "Sandbox"

    @property
    def url(self) -> str:
        """verifyReceipt endpoint for this environment."""
        return _ENDPOINTS[self]


_ENDPOINTS = {
    Environment.PRODUCTION: "https://buy.itunes.apple.com/verifyReceipt",
    Environment.SANDBOX: "https://sandbox.itunes.apple.com/verifyReceipt",
}


class SubscriptionExpirationIntent(str, Enum):
    """Why an expired subscription expired (``expiration_intent``)."""

    CUSTOMER_CANCELLED = "1"
    BILLING_ERROR = "2"
    PRICE_INCREASE_DECLINED = "3"
    PRODUCT_UNAVAILABLE = "4"
    UNKNOWN = "5"


class SubscriptionRetryFlag(str, Enum):
    """Whether the App Store is still trying to renew (``is_in_billing_retry_period``)."""

    STILL_ATTEMPTING = "0"
    STOPPED_ATTEMPTING = "1"


class SubscriptionTrialPeriod(str, Enum):
    """Free trial period flag (``is_trial_period``)."""

    IN_FREE_TRIAL = "true"
    NOT_IN_FREE_TRIAL = "false"


class SubscriptionIntroductoryPricePeriod(str, Enum):
    """Introductory price period flag (``is_in_intro_offer_period``)."""

    IN_INTRODUCTORY_PRICE_PERIOD = "true"
    NOT_IN_INTRODUCTORY_PRICE_PERIOD = "false"


class SubscriptionAutoRenewStatus(str, Enum):
    """Renewal status at the end of the current period (``auto_renew_status``)."""

    TURNED_OFF = "0"
    WILL_RENEW = "1"


class SubscriptionPriceConsentStatus(str, Enum):
    """Customer response to a subscription price increase (``price_consent_status``)."""

    NO_ACTION_TAKEN = "0"
    AGREED_TO_PRICE_INCREASE = "1"


class CancellationReason(str, Enum):
    """Why Apple customer support cancelled a transaction (``cancellation_reason``)."""

    OTHER_REASON = "0"
    ISSUE_WITHIN_APP = "1"
