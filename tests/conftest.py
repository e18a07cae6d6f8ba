"""
Pytest Configuration and Centralized Fixtures.

Provides a scripted transport and payload fixtures for testing:
- A transport that replays scripted responses and records every call
- Validators wired to that transport
- Receipt and in-app purchase payloads (builders live in factories.py)
"""

import json
import os
from collections.abc import Callable
from typing import Any

import pytest

# Set environment variables BEFORE importing receipt_validation modules
os.environ.setdefault("APPLE_SHARED_SECRET", "test-shared-secret")
os.environ.setdefault("TRACING_ENABLED", "false")
os.environ.setdefault("METRICS_ENABLED", "true")

from factories import make_receipt_payload, make_subscription_payload
from receipt_validation.services.receipt_validator import ReceiptValidator

# ============================================================================
# Transport Fixtures
# ============================================================================


class ScriptedTransport:
    """ReceiptTransport that replays responses (bytes) or raises errors in order."""

    def __init__(self, *script: bytes | Exception) -> None:
        self.script = list(script)
        self.calls: list[tuple[str, bytes, float]] = []

    async def post(self, url: str, body: bytes, timeout: float) -> bytes:
        self.calls.append((url, body, timeout))
        if not self.script:
            raise AssertionError(f"Unexpected verifyReceipt call to {url}")
        result = self.script.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    @property
    def urls(self) -> list[str]:
        """URLs called, in order."""
        return [url for url, _, _ in self.calls]

    def sent_json(self, index: int = 0) -> dict[str, Any]:
        """Decoded request body of one call."""
        return json.loads(self.calls[index][1])


@pytest.fixture
def scripted_transport() -> Callable[..., ScriptedTransport]:
    """Factory for scripted transports."""

    def _create(*script: bytes | Exception) -> ScriptedTransport:
        return ScriptedTransport(*script)

    return _create


@pytest.fixture
def validator_factory() -> Callable[..., tuple[ReceiptValidator, ScriptedTransport]]:
    """Factory for a validator wired to a scripted transport."""

    def _create(
        *script: bytes | Exception, **kwargs: Any
    ) -> tuple[ReceiptValidator, ScriptedTransport]:
        transport = ScriptedTransport(*script)
        return ReceiptValidator(transport=transport, **kwargs), transport

    return _create


@pytest.fixture
def receipt_payload() -> dict[str, Any]:
    """Standard receipt payload."""
    return make_receipt_payload()


@pytest.fixture
def subscription_payload() -> dict[str, Any]:
    """Fully populated subscription purchase payload."""
    return make_subscription_payload()
