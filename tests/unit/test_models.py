"""Unit tests for domain models."""

import pytest
from unified_gateway.models import (
    ConfigurationError,
    CreditCard,
    FailureKind,
    Response,
    TransactionOptions,
    format_amount,
    validate_amount,
)
from unified_gateway.models.request import camelize, strip_non_word, truncate


class TestAmounts:
    """Tests for amount helpers."""

    @pytest.mark.parametrize(
        "amount,expected",
        [(0, "0.00"), (1, "0.01"), (99, "0.99"), (100, "1.00"), (123456, "1234.56")],
    )
    def test_format_amount(self, amount, expected):
        assert format_amount(amount) == expected

    @pytest.mark.parametrize("amount", [1.5, "100", None, True])
    def test_non_integer_rejected(self, amount):
        with pytest.raises(TypeError):
            validate_amount(amount)

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            validate_amount(-1)


class TestCreditCard:
    """Tests for CreditCard."""

    def test_expiry_mmyy(self):
        card = CreditCard(number="4111111111111111", month=9, year=2019)

        assert card.expiry_mmyy() == "0919"

    def test_name_and_last_four(self):
        card = CreditCard(number="4111111111111111", month=9, year=2019, first_name="Longbob", last_name="Longsen")

        assert card.name == "Longbob Longsen"
        assert card.last_four == "1111"

    def test_card_is_immutable(self):
        card = CreditCard(number="4111111111111111", month=9, year=2019)

        with pytest.raises(AttributeError):
            card.number = "4242424242424242"


class TestResponse:
    """Tests for Response invariants."""

    def test_failed_response_requires_message(self):
        """Test that a failure without a message is invalid."""
        with pytest.raises(ValueError):
            Response(success=False, message="", failure_kind=FailureKind.DECLINED)

    def test_failed_response_requires_failure_kind(self):
        with pytest.raises(ValueError):
            Response(success=False, message="Declined")

    def test_successful_response_has_no_failure_kind(self):
        with pytest.raises(ValueError):
            Response(success=True, message="ok", failure_kind=FailureKind.DECLINED)

    @pytest.mark.parametrize(
        "kind,retryable",
        [
            (FailureKind.TRANSPORT_ERROR, True),
            (FailureKind.DECLINED, False),
            (FailureKind.PARSE_ERROR, False),
            (FailureKind.INVALID_REQUEST, False),
        ],
    )
    def test_retryable(self, kind, retryable):
        """Test that only transport failures are retryable."""
        response = Response(success=False, message="failed", failure_kind=kind)

        assert response.retryable is retryable

    def test_success_is_not_retryable(self):
        assert Response(success=True, message="ok").retryable is False


class TestTransactionOptions:
    """Tests for option parsing."""

    def test_unknown_keys_ignored(self):
        options = TransactionOptions.from_mapping({"order_id": "1", "not_an_option": "x"})

        assert options.order_id == "1"
        assert not hasattr(options, "not_an_option")

    def test_none_gives_empty_options(self):
        assert TransactionOptions.from_mapping(None) == TransactionOptions()

    def test_instance_passed_through(self):
        options = TransactionOptions(email="buyer@example.com")

        assert TransactionOptions.from_mapping(options) is options

    def test_nested_models(self, address):
        options = TransactionOptions.from_mapping(
            {"billing_address": address, "items": [{"name": "prueba", "quantity": 1}]}
        )

        assert options.billing_address.city == "Ottawa"
        assert options.items[0].quantity == 1

    def test_effective_address_falls_back(self, address):
        options = TransactionOptions.from_mapping({"address": address})

        assert options.effective_address.zip == "K1C2N6"

    def test_invalid_value_raises_configuration_error(self):
        """Test that unusable option values surface as ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            TransactionOptions.from_mapping({"verify_amount": -1})

        assert "verify_amount" in str(exc_info.value)

    def test_numeric_values_for_text_options(self):
        """Test that numbers given for text options are read as strings."""
        options = TransactionOptions.from_mapping(
            {"billing_address": {"address1": "1 Main", "zip": 55555}, "customer": 42}
        )

        assert options.billing_address.zip == "55555"
        assert options.customer == "42"

    def test_numeric_values_keep_int_where_accepted(self):
        options = TransactionOptions.from_mapping({"merchant_id": 3243, "installments": 3})

        assert options.merchant_id == 3243
        assert options.installments == 3


class TestFieldTransforms:
    """Tests for request field helpers."""

    def test_truncate(self):
        assert truncate("thisislongerthan17characters", 17) == "thisislongerthan1"
        assert truncate(12345, 3) == "123"
        assert truncate(None, 3) is None

    def test_strip_non_word(self):
        assert strip_non_word("456 My Street", "+") == "456+My+Street"
        assert strip_non_word("#1001-A") == "1001A"
        assert strip_non_word("order.1") == "order.1"

    def test_camelize(self):
        assert camelize("custom_one") == "CustomOne"
        assert camelize("tip_amount") == "TipAmount"
