"""
Payload builders for receipt validation tests.

Bodies are shaped exactly as Apple returns them, with overrides applied on top.
"""

import json
from typing import Any

PRODUCTION_URL = "https://buy.itunes.apple.com/verifyReceipt"
SANDBOX_URL = "https://sandbox.itunes.apple.com/verifyReceipt"

def make_in_app_payload(**overrides: Any) -> dict[str, Any]:
    """Minimal consumable purchase as Apple returns it."""
    payload: dict[str, Any] = {
        "quantity": "1",
        "product_id": "com.example.coins_100",
        "transaction_id": "1000000000000001",
        "original_transaction_id": "1000000000000001",
        "purchase_date_ms": "1591000000000",
        "original_purchase_date_ms": "1591000000000",
    }
    payload.update(overrides)
    return payload


def make_subscription_payload(**overrides: Any) -> dict[str, Any]:
    """Auto-renewable subscription purchase with every optional field present."""
    payload: dict[str, Any] = {
        "quantity": "1",
        "product_id": "com.example.monthly",
        "transaction_id": "1000000000000002",
        "original_transaction_id": "1000000000000001",
        "purchase_date_ms": "1591000000000",
        "original_purchase_date_ms": "1590000000000",
        "subscription_expiration_date_ms": "1593592000000",
        "expiration_intent": "3",
        "is_in_billing_retry_period": "1",
        "is_trial_period": "false",
        "is_in_intro_offer_period": "true",
        "auto_renew_status": "0",
        "auto_renew_product_id": "com.example.yearly",
        "price_consent_status": "1",
        "cancellationDateMS": "1592000000000.5",
        "cancellation_reason": "1",
        "app_item_id": "1234567890",
        "version_external_identifier": "834289833",
        "web_order_line_item_id": "1000000054038273",
    }
    payload.update(overrides)
    return payload


def make_receipt_payload(**overrides: Any) -> dict[str, Any]:
    """Receipt object with two purchases."""
    payload: dict[str, Any] = {
        "bundle_id": "com.example.app",
        "application_version": "42",
        "original_application_version": "1.0",
        "receipt_creation_date_ms": "1591000000000",
        "in_app": [make_in_app_payload(), make_subscription_payload()],
    }
    payload.update(overrides)
    return payload


def make_response_body(
    status: int = 0,
    receipt: dict[str, Any] | None = None,
    environment: str = "Production",
    **extra: Any,
) -> bytes:
    """Encoded verifyReceipt response body."""
    body: dict[str, Any] = {"status": status}
    if status == 0:
        body["receipt"] = receipt if receipt is not None else make_receipt_payload()
        body["environment"] = environment
    body.update(extra)
    return json.dumps(body).encode("utf-8")
