"""
Plexo gateway (Uruguay).

Plexo exposes a JSON REST API under /v1/payments. Purchases and
authorizations create a payment; captures, refunds and cancellations are
sub-resources of that payment's id, which is the authorization token.

Provider conventions worth knowing:
- `status` is "approved" or "authorized" on success. Declined payments are
  still created, so a denied response carries an `id` (authorization).
- Decline details live in the first element of `transactions`
  (`resultCode`, `resultMessage`). API-level errors (unknown payment id,
  rejected verification) have no transactions; their `status` is the HTTP
  status as an integer and `message` is generic, e.g.
  "An internal error occurred. Contact support."
- Authorization and verify responses nest the amount as
  {"currency", "total", "details"}; those are flattened into params.
"""

import base64
import uuid
from typing import Any
from urllib.parse import quote

from unified_gateway.codec import JsonCodec
from unified_gateway.gateways.base import Gateway
from unified_gateway.models import (
    CreditCard,
    MissingOptionError,
    Operation,
    PaymentSource,
    ProviderOutcome,
    ProviderRequest,
    TransactionOptions,
    UnsupportedOperationError,
    format_amount,
)
from unified_gateway.models.options import AmountDetails
from unified_gateway.models.request import camelize, truncate
from unified_gateway.scrubber import Scrubber

APPROVED_STATUSES = frozenset({"approved", "authorized"})

STATEMENT_DESCRIPTOR_MAX_LENGTH = 22

# Paths appended to the payment id for follow-up operations
FOLLOW_UP_PATHS = {
    Operation.CAPTURE: "captures",
    Operation.REFUND: "refunds",
    Operation.VOID: "cancellations",
}

# Responses that nest the amount object
AMOUNT_IN_RESPONSE = frozenset({Operation.AUTHORIZE, Operation.VERIFY})


def generate_reference_id() -> str:
    return uuid.uuid4().hex


class PlexoGateway(Gateway):
    """Plexo gateway."""

    name = "plexo"
    display_name = "Plexo"
    test_url = "https://api.testing.plexo.com.uy/v1/payments"
    live_url = "https://api.plexo.com.uy/v1/payments"

    codec = JsonCodec()
    scrubber = Scrubber(
        json_fields=("Number", "Cvc", "InvoiceNumber"),
        header_fields=("Authorization",),
    )

    success_codes = APPROVED_STATUSES

    credential_fields = ("client_id", "api_key", "merchant_id")
    required_credentials = ("client_id", "api_key")

    supported_operations = frozenset(
        {
            Operation.PURCHASE,
            Operation.AUTHORIZE,
            Operation.CAPTURE,
            Operation.VOID,
            Operation.REFUND,
            Operation.VERIFY,
        }
    )
    supported_countries = ("UY",)
    supported_cardtypes = (
        "visa",
        "master",
        "american_express",
        "discover",
        "passcard",
        "edenred",
        "anda",
        "tarjeta_d",
    )
    default_currency = "UYU"
    default_verify_amount = 100

    def __init__(
        self,
        client_id: str | None,
        api_key: str | None,
        merchant_id: str | None = None,
        test_mode: bool = True,
    ) -> None:
        """
        Initialize Plexo gateway.

        Args:
            client_id: Plexo client id (Basic auth user)
            api_key: Plexo API key (Basic auth password)
            merchant_id: Default MerchantId when options carry none
            test_mode: Use the testing environment
        """
        self.client_id = client_id
        self.api_key = api_key
        self.merchant_id = merchant_id
        super().__init__(test_mode=test_mode)

    def headers(self) -> dict[str, str]:
        token = base64.b64encode(f"{self.client_id}:{self.api_key}".encode("utf-8")).decode("ascii")
        return {
            "Content-Type": self.codec.content_type,
            "Authorization": f"Basic {token}",
        }

    def build_request(
        self,
        operation: Operation,
        amount: int | None,
        source: PaymentSource | None,
        options: TransactionOptions,
    ) -> ProviderRequest:
        self.ensure_supported(operation)

        post: dict[str, Any] = {"ReferenceId": options.reference_id or generate_reference_id()}
        url = self.url

        if operation in (Operation.PURCHASE, Operation.AUTHORIZE):
            self._add_payment_header(post, options)
            if options.installments is not None:
                post["Installments"] = options.installments
            self._add_payment_method(post, source, options)
            self._add_items(post, options)
            self._add_metadata(post, options)
            self._add_amount(post, amount, options)
            self._add_browser_details(post, options)
            if options.invoice_number:
                post["InvoiceNumber"] = options.invoice_number
            if operation == Operation.AUTHORIZE:
                post["Capture"] = {"Method": options.capture_method or "manual"}

        elif operation == Operation.VERIFY:
            self._add_payment_header(post, options)
            self._add_payment_method(post, source, options)
            self._add_metadata(post, options)
            self._add_amount(post, amount, options)
            self._add_browser_details(post, options)
            url = f"{self.url}/verify"

        elif operation == Operation.CAPTURE:
            post["Amount"] = format_amount(amount)

        elif operation == Operation.REFUND:
            post["Type"] = options.type or "refund"
            self._add_cancel_details(post, options)
            post["Amount"] = format_amount(amount)

        elif operation == Operation.VOID:
            self._add_cancel_details(post, options)

        if operation in FOLLOW_UP_PATHS:
            # The token is opaque; quote it so it can only ever be one path segment
            url = f"{self.url}/{quote(str(source), safe='')}/{FOLLOW_UP_PATHS[operation]}"

        return ProviderRequest(method="POST", url=url, params=post, headers=self.headers())

    def normalize_fields(self, operation: Operation, fields: dict[str, Any]) -> dict[str, Any]:
        amount = fields.get("amount")
        if operation not in AMOUNT_IN_RESPONSE or not isinstance(amount, dict):
            return fields

        normalized = dict(fields)
        if amount.get("total") is not None:
            normalized["amount"] = amount["total"]
        if amount.get("currency"):
            normalized["currency"] = amount["currency"]
        if amount.get("details"):
            normalized["amount_details"] = amount["details"]
        return normalized

    def parse_response(self, operation: Operation, fields: dict[str, Any]) -> ProviderOutcome:
        status = fields.get("status")
        success = status in APPROVED_STATUSES

        detail = fields
        transactions = fields.get("transactions")
        if isinstance(transactions, list) and transactions and isinstance(transactions[0], dict):
            detail = transactions[0]

        message = detail.get("resultMessage") or fields.get("message")
        if not message and isinstance(status, str):
            message = status

        error_code = None
        if not success:
            error_code = detail.get("resultCode")
            if error_code is None:
                error_code = status

        return ProviderOutcome(
            result_code=status,
            message=message,
            authorization=fields.get("id"),
            error_code=error_code,
        )

    def _add_payment_header(self, post: dict[str, Any], options: TransactionOptions) -> None:
        merchant_id = options.merchant_id if options.merchant_id is not None else self.merchant_id
        if merchant_id is not None:
            post["MerchantId"] = merchant_id
        if options.statement_descriptor:
            post["StatementDescriptor"] = truncate(
                options.statement_descriptor, STATEMENT_DESCRIPTOR_MAX_LENGTH
            )
        if options.customer_id:
            post["CustomerId"] = options.customer_id

    def _add_payment_method(
        self,
        post: dict[str, Any],
        source: PaymentSource | None,
        options: TransactionOptions,
    ) -> None:
        if not isinstance(source, CreditCard):
            raise UnsupportedOperationError(f"{self.display_name} does not accept stored card references")

        card: dict[str, Any] = {
            "Number": source.number,
            "ExpMonth": f"{source.month:02d}",
            "ExpYear": f"{source.year % 100:02d}",
        }
        if source.verification_value:
            card["Cvc"] = source.verification_value
        card["Cardholder"] = self._cardholder(source, options)

        post["paymentMethod"] = {"type": "card", "Card": card}

    def _cardholder(self, card: CreditCard, options: TransactionOptions) -> dict[str, Any]:
        if not options.email:
            raise MissingOptionError(f"{self.display_name} requires the 'email' option for card payments")

        cardholder: dict[str, Any] = {}
        if card.first_name:
            cardholder["FirstName"] = card.first_name
        if card.last_name:
            cardholder["LastName"] = card.last_name
        cardholder["Email"] = options.email
        if options.cardholder_birthdate:
            cardholder["Birthdate"] = options.cardholder_birthdate

        identification = {}
        if options.identification_type is not None:
            identification["Type"] = options.identification_type
        if options.identification_value:
            identification["Value"] = options.identification_value
        if identification:
            cardholder["Identification"] = identification

        address = options.billing_address
        if address is not None:
            cardholder["BillingAddress"] = {
                "City": address.city,
                "Country": address.country,
                "Line1": address.address1,
                "Line2": address.address2,
                "PostalCode": address.zip,
                "State": address.state,
            }
        return cardholder

    def _add_items(self, post: dict[str, Any], options: TransactionOptions) -> None:
        if not options.items:
            return

        items = []
        for option_item in options.items:
            item: dict[str, Any] = {"ReferenceId": option_item.reference_id or generate_reference_id()}
            for key in ("name", "description", "quantity", "price", "discount"):
                value = getattr(option_item, key)
                if value is not None:
                    item[camelize(key)] = value
            items.append(item)
        post["Items"] = items

    def _add_metadata(self, post: dict[str, Any], options: TransactionOptions) -> None:
        if options.metadata:
            post["Metadata"] = {camelize(key): value for key, value in options.metadata.items()}

    def _add_amount(self, post: dict[str, Any], amount: int | None, options: TransactionOptions) -> None:
        # Plexo expects a Details object even when there is no breakdown
        post["Amount"] = {
            "Currency": options.currency or self.default_currency,
            "Total": format_amount(amount),
            "Details": self._amount_details(options.amount_details),
        }

    def _amount_details(self, details: AmountDetails | None) -> dict[str, Any]:
        if details is None:
            return {}

        result: dict[str, Any] = {}
        for key in ("taxed_amount", "tip_amount", "discount_amount", "taxable_amount"):
            value = getattr(details, key)
            if value is not None:
                result[camelize(key)] = value

        if details.tax is not None:
            tax = {
                camelize(key): getattr(details.tax, key)
                for key in ("type", "amount", "rate")
                if getattr(details.tax, key) is not None
            }
            result["Tax"] = tax
        return result

    def _add_browser_details(self, post: dict[str, Any], options: TransactionOptions) -> None:
        browser_details = {}
        if options.finger_print:
            browser_details["DeviceFingerprint"] = options.finger_print
        if options.ip:
            browser_details["IpAddress"] = options.ip
        if browser_details:
            post["BrowserDetails"] = browser_details

    def _add_cancel_details(self, post: dict[str, Any], options: TransactionOptions) -> None:
        if options.description:
            post["Description"] = options.description
        if options.reason:
            post["Reason"] = options.reason
