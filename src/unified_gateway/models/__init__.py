"""Domain models for the unified gateway layer."""

from unified_gateway.models.exceptions import (
    ConfigurationError,
    GatewayError,
    MissingOptionError,
    ParseError,
    TransportError,
    UnsupportedOperationError,
)
from unified_gateway.models.options import (
    Address,
    AmountDetails,
    LineItem,
    Tax,
    TransactionOptions,
)
from unified_gateway.models.request import ProviderRequest
from unified_gateway.models.response import (
    AvsResult,
    CvvClassification,
    CvvResult,
    FailureKind,
    MatchResult,
    ProviderOutcome,
    Response,
)
from unified_gateway.models.transaction import (
    CreditCard,
    Operation,
    PaymentSource,
    format_amount,
    validate_amount,
)

__all__ = [
    "Address",
    "AmountDetails",
    "AvsResult",
    "ConfigurationError",
    "CreditCard",
    "CvvClassification",
    "CvvResult",
    "FailureKind",
    "GatewayError",
    "LineItem",
    "MatchResult",
    "MissingOptionError",
    "Operation",
    "ParseError",
    "PaymentSource",
    "ProviderOutcome",
    "ProviderRequest",
    "Response",
    "Tax",
    "TransactionOptions",
    "TransportError",
    "UnsupportedOperationError",
    "format_amount",
    "validate_amount",
]
