"""
Example usage of the transaction lifecycle against the Plexo sandbox.

This example demonstrates authorize/capture, purchase/refund, void and
verify flows using PlexoSandboxTransport, so no credentials or network
access are needed.
"""

from unified_gateway import CreditCard, PlexoGateway, TransactionLifecycle
from unified_gateway.logging_config import configure_logging
from unified_gateway.transports import PlexoSandboxTransport

OPTIONS = {
    "email": "buyer@example.com",
    "billing_address": {"address1": "Av. 18 de Julio 1234", "city": "Montevideo", "country": "UY"},
}


def build_example_lifecycle() -> TransactionLifecycle:
    gateway = PlexoGateway(client_id="example-client", api_key="example-key")
    return TransactionLifecycle(gateway, PlexoSandboxTransport())


def example_authorize_and_capture(lifecycle: TransactionLifecycle, card: CreditCard):
    """Authorize, then capture part of the hold."""
    print("=== Example 1: Authorize and Capture ===\n")

    auth = lifecycle.authorize(1000, card, OPTIONS)
    print(f"Authorize: success={auth.success} authorization={auth.authorization}")

    capture = lifecycle.capture(900, auth.authorization)
    print(f"Capture:   success={capture.success} message={capture.message}")
    print()


def example_purchase_and_refund(lifecycle: TransactionLifecycle, card: CreditCard):
    """Purchase, then refund part of it."""
    print("=== Example 2: Purchase and Partial Refund ===\n")

    purchase = lifecycle.purchase(2500, card, OPTIONS)
    refund = lifecycle.refund(500, purchase.authorization, {"type": "partial-refund"})
    print(f"Purchase: success={purchase.success}")
    print(f"Refund:   success={refund.success}")
    print()


def example_decline(lifecycle: TransactionLifecycle):
    """Declines are responses, not exceptions."""
    print("=== Example 3: Declined Card ===\n")

    declined_card = CreditCard(number="5555555555554445", month=9, year=2030, first_name="Test")
    response = lifecycle.purchase(1000, declined_card, OPTIONS)
    print(f"Success:    {response.success}")
    print(f"Message:    {response.message}")
    print(f"Error code: {response.error_code}")
    print(f"Retryable:  {response.retryable}")
    print()


def example_timeout(lifecycle: TransactionLifecycle):
    """Transport failures are retryable failed responses."""
    print("=== Example 4: Provider Timeout ===\n")

    timeout_card = CreditCard(number="4000000000000119", month=9, year=2030, first_name="Test")
    response = lifecycle.purchase(1000, timeout_card, OPTIONS)
    print(f"Failure kind: {response.failure_kind.value}")
    print(f"Retryable:    {response.retryable}")
    print()


def example_scrubbed_transcript(lifecycle: TransactionLifecycle, card: CreditCard):
    """Print the last exchange with card data filtered."""
    print("=== Example 5: Scrubbed Transcript ===\n")

    lifecycle.verify(card, OPTIONS)
    print(lifecycle.scrub(lifecycle.transport.last_exchange))
    print()


def main():
    configure_logging(log_level="WARNING", format_as_json=False)

    lifecycle = build_example_lifecycle()
    card = CreditCard(
        number="5555555555554444",
        month=12,
        year=2030,
        verification_value="123",
        first_name="Santiago",
        last_name="Navatta",
    )

    example_authorize_and_capture(lifecycle, card)
    example_purchase_and_refund(lifecycle, card)
    example_decline(lifecycle)
    example_timeout(lifecycle)
    example_scrubbed_transcript(lifecycle, card)


if __name__ == "__main__":
    main()
