"""
Unified payment gateway layer.

One canonical transaction interface (purchase, authorize, capture, void,
refund, credit, verify, store, unstore) and one canonical Response over
mutually incompatible payment-processor APIs.

Typical use:

    from unified_gateway import CreditCard, build_lifecycle

    lifecycle = build_lifecycle("plexo", {"client_id": "...", "api_key": "..."})
    auth = lifecycle.authorize(100, card, {"email": "buyer@example.com"})
    if auth.success:
        lifecycle.capture(100, auth.authorization)
"""

from unified_gateway.gateways import (
    Gateway,
    GatewayFactory,
    MerchantESolutionsGateway,
    PlexoGateway,
    get_gateway,
    scrub,
)
from unified_gateway.lifecycle import TransactionLifecycle, build_lifecycle
from unified_gateway.models import (
    Address,
    AvsResult,
    ConfigurationError,
    CreditCard,
    CvvResult,
    FailureKind,
    GatewayError,
    Operation,
    ParseError,
    Response,
    TransactionOptions,
    TransportError,
)

__all__ = [
    "Address",
    "AvsResult",
    "ConfigurationError",
    "CreditCard",
    "CvvResult",
    "FailureKind",
    "Gateway",
    "GatewayError",
    "GatewayFactory",
    "MerchantESolutionsGateway",
    "Operation",
    "ParseError",
    "PlexoGateway",
    "Response",
    "TransactionLifecycle",
    "TransactionOptions",
    "TransportError",
    "build_lifecycle",
    "get_gateway",
    "scrub",
]
