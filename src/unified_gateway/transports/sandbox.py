"""
In-process sandbox transport emulating the Plexo payments API.

This transport implements the Transport interface and answers requests the
way Plexo's testing environment does, without making network calls. It lets
the whole lifecycle (authorize -> capture, purchase -> refund,
authorize -> void, verify) run end to end in tests and local development.

Behaviour is chosen by card number, mirroring provider test cards:
- approved cards authorize/purchase successfully
- declined cards return a created-but-denied payment (resultCode "10")
- timeout cards raise TransportError, as a network failure would

Payments are kept in memory per transport instance so that partial
captures/refunds, over-captures and unknown payment ids behave like the
real API. This state belongs to the emulated provider, not to the gateway
layer.
"""

import json
import time
import uuid
from datetime import datetime, timezone
from typing import Any
from urllib.parse import urlsplit

import structlog

from unified_gateway.models.exceptions import TransportError
from unified_gateway.transports.base import Transport

logger = structlog.get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal error occurred. Contact support."

# Test card behaviours, keyed by card number
TEST_CARD_BEHAVIORS: dict[str, dict[str, Any]] = {
    "5555555555554444": {
        "type": "approve",
        "authorization": "12133",
        "description": "Mastercard approval",
    },
    "4242424242424242": {
        "type": "approve",
        "authorization": "48213",
        "description": "Visa approval",
    },
    "5555555555554445": {
        "type": "decline",
        "result_code": "10",
        "description": "Generic denial",
    },
    "4000000000009995": {
        "type": "decline",
        "result_code": "51",
        "description": "Insufficient funds",
    },
    "4000000000000119": {
        "type": "timeout",
        "description": "Simulated network timeout",
    },
}


def _parse_amount(value: Any) -> int:
    """Decimal string such as "1.00" -> 100 minor units, without floats."""
    text = str(value)
    major, _, minor = text.partition(".")
    return int(major or "0") * 100 + int((minor + "00")[:2])


class PlexoSandboxTransport(Transport):
    """
    Sandbox transport answering like Plexo's testing environment.

    Args:
        default_response: Behaviour for unknown cards ("approve" or "decline")
        latency_ms: Simulated processing latency in milliseconds
        card_behaviors: Override the default card behaviours
    """

    def __init__(
        self,
        default_response: str = "approve",
        latency_ms: int = 0,
        card_behaviors: dict[str, dict[str, Any]] | None = None,
    ) -> None:
        super().__init__()
        self.default_response = default_response
        self.latency_ms = latency_ms
        self.card_behaviors = card_behaviors if card_behaviors is not None else TEST_CARD_BEHAVIORS
        self.payments: dict[str, dict[str, Any]] = {}

        logger.info(
            "sandbox_transport_initialized",
            default_response=self.default_response,
            latency_ms=self.latency_ms,
        )

    def send(
        self,
        method: str,
        url: str,
        body: bytes,
        headers: dict[str, str],
    ) -> bytes:
        if self.latency_ms > 0:
            time.sleep(self.latency_ms / 1000.0)

        request = json.loads(body.decode("utf-8")) if body else {}
        segments = [part for part in urlsplit(url).path.split("/") if part]
        # /v1/payments[/verify | /{id}/{action}]
        tail = segments[2:]

        try:
            if not headers.get("Authorization", "").startswith("Basic "):
                document = self._error(401, "Unauthorized")
            elif not tail:
                document = self._create_payment(request)
            elif tail == ["verify"]:
                document = self._verify(request)
            elif len(tail) == 2:
                document = self._follow_up(tail[0], tail[1], request)
            else:
                document = self._error(404, "Not found")
        except TransportError:
            self.record(method, url, headers, body, None)
            raise

        response_body = json.dumps(document).encode("utf-8")
        self.record(method, url, headers, body, response_body)
        return response_body

    def _behavior(self, request: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        card_number = request.get("paymentMethod", {}).get("Card", {}).get("Number", "")
        behavior = self.card_behaviors.get(card_number) or {"type": self.default_response}
        return card_number, behavior

    def _create_payment(self, request: dict[str, Any]) -> dict[str, Any]:
        card_number, behavior = self._behavior(request)
        behavior_type = behavior["type"]
        amount = request.get("Amount", {})
        total = _parse_amount(amount.get("Total", "0"))
        manual = request.get("Capture", {}).get("Method") == "manual"

        if behavior_type == "timeout":
            logger.warning("sandbox_timeout", card_last_four=card_number[-4:])
            raise TransportError(f"Sandbox timeout: {behavior.get('description', 'Simulated timeout')}")

        payment_id = uuid.uuid4().hex[:24]

        if behavior_type == "decline":
            status = "denied"
            transaction = {
                "status": "denied",
                "resultCode": behavior.get("result_code", "10"),
                "resultMessage": "denied",
            }
        else:
            status = "authorized" if manual else "approved"
            transaction = {
                "status": status,
                "resultCode": "0",
                "resultMessage": "You have been mocked.",
                "authorization": behavior.get("authorization", f"{uuid.uuid4().int % 100000:05d}"),
            }
            self.payments[payment_id] = {
                "authorized": total,
                "captured": 0 if manual else total,
                "refunded": 0,
                "cancelled": False,
            }

        logger.info(
            "sandbox_payment_created",
            payment_id=payment_id,
            status=status,
            card_last_four=card_number[-4:],
        )

        return {
            "id": payment_id,
            "referenceId": request.get("ReferenceId"),
            "type": "authonly" if manual else "purchase",
            "status": status,
            "createdAt": datetime.now(timezone.utc).isoformat(),
            "amount": {
                "currency": amount.get("Currency"),
                "total": total / 100 if total % 100 else total // 100,
                "details": amount.get("Details", {}),
            },
            "transactions": [
                {
                    "id": uuid.uuid4().hex[:24],
                    "referenceId": request.get("ReferenceId"),
                    "type": "authonly" if manual else "purchase",
                    **transaction,
                }
            ],
        }

    def _verify(self, request: dict[str, Any]) -> dict[str, Any]:
        card_number, behavior = self._behavior(request)
        if behavior["type"] == "timeout":
            raise TransportError("Sandbox timeout during verification")
        if behavior["type"] == "decline":
            return self._error(400, "The card could not be verified.")

        amount = request.get("Amount", {})
        return {
            "id": uuid.uuid4().hex[:24],
            "referenceId": request.get("ReferenceId"),
            "type": "verify",
            "status": "approved",
            "amount": {
                "currency": amount.get("Currency"),
                "total": _parse_amount(amount.get("Total", "0")) // 100,
            },
        }

    def _follow_up(self, payment_id: str, action: str, request: dict[str, Any]) -> dict[str, Any]:
        payment = self.payments.get(payment_id)
        if payment is None or action not in ("captures", "refunds", "cancellations"):
            return self._error(400, INTERNAL_ERROR_MESSAGE)

        if action == "captures":
            amount = _parse_amount(request.get("Amount", "0"))
            if payment["cancelled"] or payment["captured"]:
                return self._error(400, "The payment cannot be captured.")
            if amount > payment["authorized"]:
                return self._error(400, "Capture amount exceeds the authorized amount.")
            payment["captured"] = amount

        elif action == "refunds":
            amount = _parse_amount(request.get("Amount", "0"))
            if amount > payment["captured"] - payment["refunded"]:
                return self._error(400, "Refund amount exceeds the captured amount.")
            payment["refunded"] += amount

        else:
            if payment["cancelled"] or payment["captured"]:
                return self._error(400, "The payment cannot be cancelled.")
            payment["cancelled"] = True

        return {
            "id": payment_id,
            "referenceId": request.get("ReferenceId"),
            "type": action,
            "status": "approved",
        }

    def _error(self, status: int, message: str) -> dict[str, Any]:
        return {
            "code": "internal-error" if message == INTERNAL_ERROR_MESSAGE else "invalid-request",
            "message": message,
            "type": "api-error",
            "status": status,
        }
