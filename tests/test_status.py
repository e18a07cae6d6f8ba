"""
Tests for verifyReceipt status classification.
"""

import pytest

from receipt_validation.models.status import SUCCESS_STATUS, ErrorKind, classify


class TestClassify:
    """Tests for classify."""

    @pytest.mark.parametrize(
        ("status_code", "kind"),
        [
            (21000, ErrorKind.INVALID_JSON_OBJECT),
            (21002, ErrorKind.RECEIPT_DATA_MALFORMED_OR_MISSING),
            (21003, ErrorKind.RECEIPT_COULD_NOT_BE_AUTHENTICATED),
            (21004, ErrorKind.SHARED_SECRET_MISMATCH),
            (21005, ErrorKind.SERVER_UNAVAILABLE),
            (21006, ErrorKind.SUBSCRIPTION_EXPIRED),
            (21007, ErrorKind.WRONG_ENVIRONMENT_SANDBOX_RECEIPT_SENT_TO_PRODUCTION),
            (21008, ErrorKind.WRONG_ENVIRONMENT_PRODUCTION_RECEIPT_SENT_TO_SANDBOX),
            (21010, ErrorKind.RECEIPT_COULD_NOT_BE_AUTHORIZED),
        ],
    )
    def test_documented_codes(self, status_code, kind):
        """Every documented status maps to its kind."""
        assert classify(status_code) is kind

    def test_success_is_not_an_error(self):
        """Status 0 classifies as no error."""
        assert SUCCESS_STATUS == 0
        assert classify(0) is None

    @pytest.mark.parametrize("status_code", [21100, 21101, 21150, 21199])
    def test_internal_data_access_range(self, status_code):
        """21100-21199 inclusive are internal data access errors."""
        assert classify(status_code) is ErrorKind.INTERNAL_DATA_ACCESS_ERROR

    @pytest.mark.parametrize("status_code", [21001, 21009, 21099, 21200, 1, -1, 99999])
    def test_unknown_codes(self, status_code):
        """Codes outside the table are unknown errors."""
        assert classify(status_code) is ErrorKind.UNKNOWN_ERROR


class TestErrorKind:
    """Tests for ErrorKind helpers."""

    def test_every_kind_has_description(self):
        """All kinds carry Apple's explanation."""
        for kind in ErrorKind:
            assert kind.description

    def test_wrong_environment_kinds(self):
        """Only 21007 and 21008 are wrong-environment kinds."""
        wrong = {kind for kind in ErrorKind if kind.is_wrong_environment}
        assert wrong == {
            ErrorKind.WRONG_ENVIRONMENT_SANDBOX_RECEIPT_SENT_TO_PRODUCTION,
            ErrorKind.WRONG_ENVIRONMENT_PRODUCTION_RECEIPT_SENT_TO_SANDBOX,
        }

    def test_string_value(self):
        """Kinds are usable as plain strings (metric labels, JSON)."""
        assert ErrorKind.SHARED_SECRET_MISMATCH == "shared_secret_mismatch"
