"""Canonical response models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

# Providers report error codes as strings or integers; both are kept as-is.
ProviderCode = Union[str, int]


class MatchResult(str, Enum):
    """Street or postal code match reported by AVS."""

    MATCH = "match"
    NO_MATCH = "no-match"
    UNAVAILABLE = "unavailable"


class CvvClassification(str, Enum):
    """Canonical CVV check outcome."""

    MATCHES = "matches"
    DOES_NOT_MATCH = "does-not-match"
    NOT_PROCESSED = "not-processed"
    UNAVAILABLE = "unavailable"


class FailureKind(str, Enum):
    """Why a Response has success=False."""

    DECLINED = "declined"
    TRANSPORT_ERROR = "transport_error"
    PARSE_ERROR = "parse_error"
    INVALID_REQUEST = "invalid_request"


@dataclass(frozen=True)
class AvsResult:
    code: str
    message: str | None
    street_match: MatchResult
    postal_match: MatchResult


@dataclass(frozen=True)
class CvvResult:
    code: str
    message: str | None
    classification: CvvClassification


@dataclass(frozen=True)
class ProviderOutcome:
    """
    Fields a gateway extracts from a decoded provider response.

    This is the hand-off between provider-specific parsing and the shared
    ResultMapper. Codes keep the provider's native type.
    """

    result_code: ProviderCode | None
    message: str | None = None
    authorization: str | None = None
    error_code: ProviderCode | None = None
    avs_code: str | None = None
    cvv_code: str | None = None


@dataclass(frozen=True)
class Response:
    """
    Canonical result of a gateway call.

    Every provider's answer, approved or declined, is returned as one of
    these. Declines are NOT exceptions; callers must check `success`.
    """

    success: bool
    message: str
    params: dict[str, Any] = field(default_factory=dict)
    authorization: str | None = None
    error_code: ProviderCode | None = None
    avs_result: AvsResult | None = None
    cvv_result: CvvResult | None = None
    test: bool = False
    failure_kind: FailureKind | None = None

    def __post_init__(self) -> None:
        """Validate that failed responses explain themselves."""
        if self.success:
            if self.failure_kind is not None:
                raise ValueError("failure_kind must be None for a successful response")
        else:
            if not self.message:
                raise ValueError("message required for a failed response")
            if self.failure_kind is None:
                raise ValueError("failure_kind required for a failed response")

    @property
    def retryable(self) -> bool:
        """True only when the provider was never reached."""
        return self.failure_kind == FailureKind.TRANSPORT_ERROR
