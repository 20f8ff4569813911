"""
Canonical transaction lifecycle.

TransactionLifecycle ties the components together for each call:
- Credential check (before anything is built or sent)
- Local amount validation
- Request building by the provider gateway
- Encoding and sending through the transport
- Decoding and mapping into a canonical Response
- Scrubbed transcript logging

It owns no state between calls. The only thing threaded from one call to the
next is the authorization token the caller passes back in.
"""

from typing import Any, Mapping, Union

import structlog

from unified_gateway.config import settings
from unified_gateway.gateways.base import Gateway
from unified_gateway.gateways.factory import GatewayFactory
from unified_gateway.models import (
    CreditCard,
    FailureKind,
    Operation,
    ParseError,
    PaymentSource,
    Response,
    TransactionOptions,
    TransportError,
    validate_amount,
)
from unified_gateway.models.transaction import AMOUNT_REQUIRED_OPERATIONS
from unified_gateway.transports.base import Transport
from unified_gateway.transports.httpx_transport import HttpxTransport

logger = structlog.get_logger(__name__)

OptionsArg = Union[TransactionOptions, Mapping[str, Any], None]

TRANSPORT_FAILURE_MESSAGE = "Unable to reach the payment gateway. Please try again later."
PARSE_FAILURE_MESSAGE = "Invalid response received from the payment gateway. Contact support."
INVALID_AMOUNT_MESSAGE = "Amount must be greater than zero"


class TransactionLifecycle:
    """
    Runs canonical operations against one gateway through one transport.

    Declines come back as Response(success=False); only configuration
    problems raise. Transport and parse failures are converted into failed
    responses whose failure_kind tells callers whether a retry makes sense.

    Args:
        gateway: Provider gateway
        transport: Transport collaborator (defaults to HttpxTransport)
    """

    def __init__(self, gateway: Gateway, transport: Transport | None = None) -> None:
        self.gateway = gateway
        self.transport = transport or HttpxTransport(
            timeout_seconds=settings.transport.timeout_seconds
        )

    def purchase(self, amount: int, payment: PaymentSource, options: OptionsArg = None) -> Response:
        """Authorize and capture in one step."""
        return self._commit(Operation.PURCHASE, amount, payment, options)

    def authorize(self, amount: int, payment: PaymentSource, options: OptionsArg = None) -> Response:
        """Place a hold; the returned authorization is needed to capture or void."""
        return self._commit(Operation.AUTHORIZE, amount, payment, options)

    def capture(self, amount: int, authorization: str, options: OptionsArg = None) -> Response:
        """
        Capture a prior authorization, fully or partially.

        Capturing more than was authorized is left for the provider to decline.
        """
        return self._commit(Operation.CAPTURE, amount, authorization, options)

    def void(self, authorization: str, options: OptionsArg = None) -> Response:
        """
        Cancel an authorization.

        Always forwarded: a void after capture is answered by the provider,
        and whatever it reports is returned unmodified.
        """
        return self._commit(Operation.VOID, None, authorization, options)

    def refund(self, amount: int, authorization: str, options: OptionsArg = None) -> Response:
        """Refund a captured or purchased transaction; pass type='partial-refund' where needed."""
        return self._commit(Operation.REFUND, amount, authorization, options)

    def credit(self, amount: int, payment: PaymentSource, options: OptionsArg = None) -> Response:
        """Send funds to a card without a prior authorization."""
        return self._commit(Operation.CREDIT, amount, payment, options)

    def verify(self, card: PaymentSource, options: OptionsArg = None) -> Response:
        """
        Validate a card without leaving a captured charge.

        Uses the provider's own verification when it has one. Otherwise
        authorizes verify_amount (default 100) and voids it straight away,
        returning the authorization response.
        """
        opts = TransactionOptions.from_mapping(options)
        amount = opts.verify_amount
        if amount is None:
            amount = self.gateway.default_verify_amount

        if self.gateway.supports(Operation.VERIFY):
            return self._commit(Operation.VERIFY, amount, card, opts)

        auth = self._commit(Operation.AUTHORIZE, amount, card, opts)
        if auth.success and auth.authorization:
            void = self._commit(Operation.VOID, None, auth.authorization, opts)
            if not void.success:
                logger.warning(
                    "verify_void_failed",
                    gateway=self.gateway.name,
                    error_code=void.error_code,
                    message=void.message,
                )
        return auth

    def store(self, card: CreditCard, options: OptionsArg = None) -> Response:
        """
        Store a card with the provider.

        The response's authorization is the stored card reference to use in
        place of card details later.
        """
        opts = TransactionOptions.from_mapping(options)

        stored = self._commit(Operation.STORE, None, card, opts)
        if not stored.success or not self.gateway.verify_after_store:
            return stored
        if not stored.authorization:
            # Approved, but with no card reference there is nothing to verify
            logger.error(
                "gateway_store_reference_missing",
                gateway=self.gateway.name,
                params=sorted(stored.params),
            )
            return self._failure(FailureKind.PARSE_ERROR, PARSE_FAILURE_MESSAGE)

        verify_options = opts.model_copy(update={"store_card": "y"})
        verified = self._commit(Operation.VERIFY, None, stored.authorization, verify_options)
        if not verified.success:
            return verified

        return Response(
            success=True,
            message=verified.message,
            params=verified.params,
            authorization=stored.authorization,
            avs_result=verified.avs_result,
            cvv_result=verified.cvv_result,
            test=verified.test,
        )

    def unstore(self, card_reference: str, options: OptionsArg = None) -> Response:
        """Delete a stored card."""
        return self._commit(Operation.UNSTORE, None, card_reference, options)

    def scrub(self, transcript: str | bytes | None) -> str:
        return self.gateway.scrub(transcript)

    def _commit(
        self,
        operation: Operation,
        amount: int | None,
        source: PaymentSource | None,
        options: OptionsArg,
    ) -> Response:
        self.gateway.ensure_configured()
        self.gateway.ensure_supported(operation)
        opts = TransactionOptions.from_mapping(options)

        if not self._amount_acceptable(operation, amount):
            logger.warning(
                "gateway_amount_rejected",
                gateway=self.gateway.name,
                operation=operation.value,
                amount=amount,
            )
            return self._failure(FailureKind.INVALID_REQUEST, INVALID_AMOUNT_MESSAGE)

        request = self.gateway.build_request(operation, amount, source, opts)
        body = self.gateway.codec.encode(request.params)

        logger.info(
            "gateway_request_starting",
            gateway=self.gateway.name,
            operation=operation.value,
            amount=amount,
            card_last_four=source.last_four if isinstance(source, CreditCard) else None,
            test_mode=self.gateway.test_mode,
        )

        exchanges_before = self.transport.exchange_count
        try:
            raw = self.transport.send(request.method, request.url, body, request.headers)
        except TransportError as e:
            logger.error(
                "gateway_transport_failed",
                gateway=self.gateway.name,
                operation=operation.value,
                error=str(e),
            )
            return self._failure(FailureKind.TRANSPORT_ERROR, TRANSPORT_FAILURE_MESSAGE)
        finally:
            if self.transport.exchange_count != exchanges_before:
                self._log_transcript(operation)

        try:
            fields = self.gateway.codec.decode(raw)
        except ParseError as e:
            logger.error(
                "gateway_response_unparseable",
                gateway=self.gateway.name,
                operation=operation.value,
                error=str(e),
            )
            return self._failure(FailureKind.PARSE_ERROR, PARSE_FAILURE_MESSAGE)

        response = self.gateway.map_response(operation, fields)

        logger.info(
            "gateway_response_received",
            gateway=self.gateway.name,
            operation=operation.value,
            success=response.success,
            authorization=response.authorization,
            error_code=response.error_code,
        )
        return response

    @staticmethod
    def _amount_acceptable(operation: Operation, amount: int | None) -> bool:
        """
        Check an amount before anything is sent.

        Non-integers raise TypeError. Negative amounts, and zero or missing
        amounts where money must move, are refused locally.
        """
        if amount is not None:
            try:
                validate_amount(amount)
            except ValueError:
                return False
        if operation in AMOUNT_REQUIRED_OPERATIONS:
            return amount is not None and amount > 0
        return True

    def _failure(self, kind: FailureKind, message: str) -> Response:
        return Response(
            success=False,
            message=message,
            test=self.gateway.test_mode,
            failure_kind=kind,
        )

    def _log_transcript(self, operation: Operation) -> None:
        exchange = self.transport.last_exchange
        if exchange:
            logger.debug(
                "gateway_transcript",
                gateway=self.gateway.name,
                operation=operation.value,
                transcript=self.gateway.scrub(exchange),
            )


def build_lifecycle(
    gateway_name: str | None = None,
    gateway_config: dict[str, Any] | None = None,
    transport: Transport | None = None,
    test_mode: bool | None = None,
) -> TransactionLifecycle:
    """Create a TransactionLifecycle for a provider identifier."""
    gateway = GatewayFactory.create_gateway(
        gateway_name or settings.default_gateway,
        gateway_config,
        test_mode,
    )
    return TransactionLifecycle(gateway, transport)
