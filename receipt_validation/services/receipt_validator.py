"""
App Store Receipt Validator.

NO DICTIONARIES - All data uses strongly typed models.

Validates receipts against Apple's legacy verifyReceipt endpoint.
https://developer.apple.com/documentation/appstorereceipts/verifyreceipt

Apple's guidance is to always call production first and to retry against the
sandbox only when production answers 21007 (a sandbox receipt, e.g. from App
Review). That rule is ``fallback_environment``; ``ReceiptValidator.validate``
just follows it, so there are at most two attempts, production then sandbox.
"""

import time

from structlog import get_logger

from receipt_validation.config import Settings, get_settings
from receipt_validation.exceptions import (
    AppStoreStatusError,
    ReceiptValidationError,
    TransportError,
)
from receipt_validation.models.enums import Environment
from receipt_validation.models.receipt import Receipt
from receipt_validation.models.status import ErrorKind, classify
from receipt_validation.models.wire import (
    VerifyReceiptRequest,
    VerifyReceiptResponse,
    VerifyReceiptStatus,
    decode_body,
)
from receipt_validation.observability.metrics import metrics
from receipt_validation.observability.tracing import trace_operation
from receipt_validation.services.transport import HttpxTransport, ReceiptTransport

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0


def fallback_environment(environment: Environment, kind: ErrorKind) -> Environment | None:
    """
    Environment to retry in after a failed attempt, if any.

    Only a sandbox receipt sent to production is retried. A sandbox attempt is
    never retried, whatever its status, so validation cannot loop.
    """
    if (
        environment is Environment.PRODUCTION
        and kind is ErrorKind.WRONG_ENVIRONMENT_SANDBOX_RECEIPT_SENT_TO_PRODUCTION
    ):
        return Environment.SANDBOX
    return None


def _outcome(exc: ReceiptValidationError) -> str:
    """Metric label for a failed attempt or validation; anything else is a DecodeError."""
    if isinstance(exc, AppStoreStatusError):
        return exc.kind.value
    if isinstance(exc, TransportError):
        return "transport_error"
    return "decode_error"


class ReceiptValidator:
    """
    Validates App Store receipts via verifyReceipt.

    Holds no per-call state, so one instance can serve concurrent validations.
    """

    def __init__(
        self,
        transport: ReceiptTransport,
        shared_secret: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        exclude_old_transactions: bool | None = None,
    ) -> None:
        """
        Initialize receipt validator.

        Args:
            transport: Executes the verifyReceipt POSTs
            shared_secret: Default App-specific shared secret sent as ``password``
            timeout: Deadline in seconds for each attempt
            exclude_old_transactions: Default for calls that do not specify it
        """
        if timeout <= 0:
            raise ValueError(f"Timeout must be positive: {timeout}")

        self.transport = transport
        self.shared_secret = shared_secret or None
        self.timeout = timeout
        self.exclude_old_transactions = exclude_old_transactions

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        transport: ReceiptTransport | None = None,
    ) -> "ReceiptValidator":
        """Build a validator from configuration, with an httpx transport by default."""
        settings = settings or get_settings()
        return cls(
            transport=transport or HttpxTransport(),
            shared_secret=settings.apple_shared_secret,
            timeout=settings.verify_receipt_timeout_seconds,
            exclude_old_transactions=settings.exclude_old_transactions,
        )

    async def validate(
        self,
        receipt_data: str,
        exclude_old_transactions: bool | None = None,
        shared_secret: str | None = None,
    ) -> Receipt:
        """
        Validate a receipt with the App Store.

        Args:
            receipt_data: Base64 encoded receipt as sent by the app
            exclude_old_transactions: Only return the latest renewal of each subscription
            shared_secret: App-specific shared secret, overriding the default

        Returns:
            The ``receipt`` of the attempt that succeeded

        Raises:
            ValueError: If receipt_data is empty
            AppStoreStatusError: If the App Store reports a non-zero status
            TransportError: If the App Store cannot be reached in time
            DecodeError: If the response body cannot be decoded
        """
        if not receipt_data:
            raise ValueError("receipt_data is required")

        if exclude_old_transactions is None:
            exclude_old_transactions = self.exclude_old_transactions

        request = VerifyReceiptRequest(
            receipt_data=receipt_data,
            password=shared_secret or self.shared_secret,
            exclude_old_transactions=exclude_old_transactions,
        )

        logger.info(
            "receipt_validation_started",
            has_shared_secret=request.password is not None,
            exclude_old_transactions=exclude_old_transactions,
        )

        environment = Environment.PRODUCTION
        try:
            while True:
                try:
                    response = await self._execute(request, environment)
                except AppStoreStatusError as exc:
                    retry_in = fallback_environment(environment, exc.kind)
                    if retry_in is None:
                        raise

                    logger.info(
                        "receipt_environment_fallback",
                        from_environment=environment.value,
                        to_environment=retry_in.value,
                        status=exc.status_code,
                    )
                    metrics.record_fallback()
                    environment = retry_in
                    continue
                break

        except ReceiptValidationError as exc:
            logger.warning(
                "receipt_validation_failed",
                environment=environment.value,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            metrics.record_validation(_outcome(exc))
            raise

        logger.info(
            "receipt_validated",
            environment=environment.value,
            receipt_environment=response.environment.value,
            bundle_id=response.receipt.bundle_id,
            in_app_count=len(response.receipt.in_app),
        )
        metrics.record_validation("success")

        return response.receipt

    async def _execute(
        self, request: VerifyReceiptRequest, environment: Environment
    ) -> VerifyReceiptResponse:
        """
        Run one verifyReceipt attempt against one environment.

        The status is decoded on its own first: error responses carry no
        receipt, so decoding the full response is only attempted for status 0.
        """
        started = time.perf_counter()
        outcome = "error"

        with trace_operation(
            "verify_receipt_attempt", environment=environment.value
        ) as span:
            try:
                body = await self.transport.post(environment.url, request.to_json(), self.timeout)

                status = decode_body(VerifyReceiptStatus, body).status
                span.set_attribute("app_store.status", status)

                kind = classify(status)
                if kind is not None:
                    raise AppStoreStatusError(status, kind)

                response = decode_body(VerifyReceiptResponse, body)
                outcome = "success"
                return response

            except ReceiptValidationError as exc:
                outcome = _outcome(exc)
                raise
            finally:
                metrics.record_attempt(
                    environment.value, outcome, time.perf_counter() - started
                )
