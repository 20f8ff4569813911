"""
Merchant e-Solutions (Trident API) gateway.

Requests and responses are form-encoded key/value pairs posted to a single
endpoint; the operation is selected by `transaction_type`.

Provider conventions worth knowing:
- `error_code` is both the result code and the decline code. "000" means
  approved and "085" means "Card Ok" for zero-amount verifications.
- `transaction_id` is echoed on declines too, so a declined response still
  carries an authorization. When nothing was created the provider sends the
  literal `transaction_id=error`, which is reported as no authorization.
- Stored cards are referenced by `card_id`; when present it takes precedence
  over `transaction_id` as the authorization.
"""

from typing import Any

import structlog

from unified_gateway.codec import FormCodec
from unified_gateway.gateways.base import Gateway
from unified_gateway.models import (
    CreditCard,
    Operation,
    PaymentSource,
    ProviderOutcome,
    ProviderRequest,
    TransactionOptions,
    format_amount,
)
from unified_gateway.models.request import strip_non_word, truncate
from unified_gateway.scrubber import Scrubber

logger = structlog.get_logger(__name__)

# Maximum invoice_number length accepted by the Trident API
INVOICE_NUMBER_MAX_LENGTH = 17

TRANSACTION_TYPES = {
    Operation.PURCHASE: "D",
    Operation.AUTHORIZE: "P",
    Operation.CAPTURE: "S",
    Operation.VOID: "V",
    Operation.REFUND: "U",
    Operation.CREDIT: "C",
    Operation.VERIFY: "A",
    Operation.STORE: "T",
    Operation.UNSTORE: "X",
}

APPROVED_MESSAGE = "This transaction has been approved"

# Sent by the provider when no transaction was created
NO_TRANSACTION_ID = "error"


class MerchantESolutionsGateway(Gateway):
    """
    Merchant e-Solutions gateway (US card processing).

    Verification is always a zero-amount "A" transaction; a caller's
    verify_amount is not sent.
    """

    name = "merchant_e_solutions"
    display_name = "Merchant e-Solutions"
    test_url = "https://cert.merchante-solutions.com/mes-api/tridentApi"
    live_url = "https://api.merchante-solutions.com/mes-api/tridentApi"

    codec = FormCodec()
    scrubber = Scrubber(form_fields=("card_number", "cvv2", "profile_key"))

    success_codes = frozenset({"000", "085"})

    credential_fields = ("login", "password")
    required_credentials = ("login", "password")

    supported_operations = frozenset(TRANSACTION_TYPES)
    supported_countries = ("US",)
    supported_cardtypes = ("visa", "master", "american_express", "discover", "jcb")

    # "A" transactions are zero-amount account verifications
    default_verify_amount = 0
    verify_after_store = True

    def __init__(self, login: str | None, password: str | None, test_mode: bool = True) -> None:
        """
        Initialize Merchant e-Solutions gateway.

        Args:
            login: Profile ID
            password: Profile key
            test_mode: Use the certification endpoint
        """
        self.login = login
        self.password = password
        super().__init__(test_mode=test_mode)

    def build_request(
        self,
        operation: Operation,
        amount: int | None,
        source: PaymentSource | None,
        options: TransactionOptions,
    ) -> ProviderRequest:
        self.ensure_supported(operation)

        params: dict[str, Any] = {
            "profile_id": self.login,
            "profile_key": self.password,
            "transaction_type": TRANSACTION_TYPES[operation],
        }
        if options.customer is not None:
            params["client_reference_number"] = options.customer

        if operation in (Operation.PURCHASE, Operation.AUTHORIZE):
            self._add_recurring(params, options)
            self._add_invoice(params, options)
            self._add_payment_source(params, source, options)
            self._add_address(params, options)
            self._add_3dsecure(params, options)
            self._add_stored_credentials(params, options)

        elif operation == Operation.CAPTURE:
            params["transaction_id"] = source
            self._add_invoice(params, options)
            self._add_3dsecure(params, options)

        elif operation in (Operation.REFUND, Operation.VOID):
            params["transaction_id"] = source

        elif operation == Operation.CREDIT:
            self._add_invoice(params, options)
            self._add_payment_source(params, source, options)

        elif operation == Operation.VERIFY:
            if options.store_card:
                params["store_card"] = options.store_card
            self._add_payment_source(params, source, options)
            if options.verify_amount not in (None, self.default_verify_amount):
                logger.warning(
                    "verify_amount_ignored",
                    gateway=self.name,
                    verify_amount=options.verify_amount,
                )
            amount = self.default_verify_amount

        elif operation == Operation.STORE:
            self._add_credit_card(params, source)

        elif operation == Operation.UNSTORE:
            params["card_id"] = source

        # Voids, stores and unstores carry no amount
        if amount is not None and operation not in (
            Operation.VOID,
            Operation.STORE,
            Operation.UNSTORE,
        ):
            params["transaction_amount"] = format_amount(amount)

        return ProviderRequest(method="POST", url=self.url, params=params, headers=self.headers())

    def parse_response(self, operation: Operation, fields: dict[str, Any]) -> ProviderOutcome:
        error_code = fields.get("error_code")

        if error_code == "000":
            message = APPROVED_MESSAGE
        else:
            message = fields.get("auth_response_text")

        authorization = fields.get("card_id") or fields.get("transaction_id")
        if authorization == NO_TRANSACTION_ID:
            authorization = None

        return ProviderOutcome(
            result_code=error_code,
            message=message,
            authorization=authorization,
            error_code=error_code,
            avs_code=fields.get("avs_result"),
            cvv_code=fields.get("cvv2_result"),
        )

    def _add_recurring(self, params: dict[str, Any], options: TransactionOptions) -> None:
        if options.moto_ecommerce_ind is not None:
            params["moto_ecommerce_ind"] = options.moto_ecommerce_ind
        if options.recurring_pmt_num:
            params["recurring_pmt_num"] = options.recurring_pmt_num
        if options.recurring_pmt_count:
            params["recurring_pmt_count"] = options.recurring_pmt_count

    def _add_invoice(self, params: dict[str, Any], options: TransactionOptions) -> None:
        if options.order_id is not None:
            order_id = strip_non_word(options.order_id)
            params["invoice_number"] = truncate(order_id, INVOICE_NUMBER_MAX_LENGTH)

    def _add_payment_source(
        self,
        params: dict[str, Any],
        source: PaymentSource | None,
        options: TransactionOptions,
    ) -> None:
        if isinstance(source, str):
            # Previously stored card
            params["card_id"] = source
            if options.expiration_date:
                params["card_exp_date"] = options.expiration_date
        else:
            self._add_credit_card(params, source)

    def _add_credit_card(self, params: dict[str, Any], card: CreditCard | None) -> None:
        if not isinstance(card, CreditCard):
            raise TypeError(f"{self.display_name} needs a CreditCard, got {type(card).__name__}")

        params["card_number"] = card.number
        if card.verification_value:
            params["cvv2"] = card.verification_value
        params["card_exp_date"] = card.expiry_mmyy()

    def _add_address(self, params: dict[str, Any], options: TransactionOptions) -> None:
        address = options.effective_address
        if address is None:
            return
        params["cardholder_street_address"] = strip_non_word(address.address1 or "", "+")
        params["cardholder_zip"] = address.zip or ""

    def _add_3dsecure(self, params: dict[str, Any], options: TransactionOptions) -> None:
        for key in ("xid", "cavv", "ucaf_collection_ind", "ucaf_auth_data"):
            value = getattr(options, key)
            if value not in (None, ""):
                params[key] = value

    def _add_stored_credentials(self, params: dict[str, Any], options: TransactionOptions) -> None:
        for key in (
            "client_reference_number",
            "card_on_file",
            "cit_mit_indicator",
            "account_data_source",
        ):
            value = getattr(options, key)
            if value:
                params[key] = value
