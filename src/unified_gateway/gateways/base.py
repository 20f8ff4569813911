"""Base capability interface for payment gateways."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Mapping

from unified_gateway.code_tables import STANDARD_AVS_CODES, STANDARD_CVV_CODES, AvsEntry, CvvEntry
from unified_gateway.codec import Codec
from unified_gateway.models import (
    ConfigurationError,
    Operation,
    PaymentSource,
    ProviderOutcome,
    ProviderRequest,
    Response,
    TransactionOptions,
    UnsupportedOperationError,
)
from unified_gateway.result_mapper import ResultMapper
from unified_gateway.scrubber import Scrubber


class Gateway(ABC):
    """
    Abstract base class for payment gateway integrations.

    A gateway knows how to talk to exactly one provider: which parameters to
    send for each canonical operation, how to read the provider's answer, and
    which codes mean what. It performs no I/O; TransactionLifecycle sends the
    requests it builds through a Transport.

    Subclasses set the class attributes below and implement build_request()
    and parse_response().
    """

    name: ClassVar[str]
    display_name: ClassVar[str]
    test_url: ClassVar[str]
    live_url: ClassVar[str]

    codec: ClassVar[Codec]
    scrubber: ClassVar[Scrubber]

    success_codes: ClassVar[frozenset[Any]]
    avs_codes: ClassVar[Mapping[str, AvsEntry]] = STANDARD_AVS_CODES
    cvv_codes: ClassVar[Mapping[str, CvvEntry]] = STANDARD_CVV_CODES

    # Constructor arguments; the required ones must be non-empty
    credential_fields: ClassVar[tuple[str, ...]]
    required_credentials: ClassVar[tuple[str, ...]]

    supported_operations: ClassVar[frozenset[Operation]]
    supported_countries: ClassVar[tuple[str, ...]] = ()
    supported_cardtypes: ClassVar[tuple[str, ...]] = ()
    default_currency: ClassVar[str] = "USD"

    # Amount used by verify() when the caller supplies no verify_amount
    default_verify_amount: ClassVar[int] = 100

    # Store is a temporary store followed by a verify of the stored card
    verify_after_store: ClassVar[bool] = False

    def __init__(self, test_mode: bool = True) -> None:
        self.test_mode = test_mode
        self.ensure_configured()
        self.result_mapper = ResultMapper(self.success_codes, self.avs_codes, self.cvv_codes)

    @classmethod
    def from_config(cls, config: Mapping[str, Any], test_mode: bool = True) -> "Gateway":
        """Create a gateway from a config mapping, ignoring unrelated keys."""
        kwargs = {key: config.get(key) for key in cls.credential_fields}
        return cls(**kwargs, test_mode=test_mode)

    @property
    def credentials(self) -> dict[str, Any]:
        return {key: getattr(self, key, None) for key in self.credential_fields}

    def ensure_configured(self) -> None:
        """
        Check that every required credential is present and non-empty.

        Raises:
            ConfigurationError: a required credential is missing or blank
        """
        missing = [
            key
            for key in self.required_credentials
            if not str(getattr(self, key, None) or "").strip()
        ]
        if missing:
            raise ConfigurationError(
                f"{self.display_name} requires non-empty credentials: {', '.join(missing)}"
            )

    @property
    def url(self) -> str:
        return self.test_url if self.test_mode else self.live_url

    def supports(self, operation: Operation) -> bool:
        return operation in self.supported_operations

    def ensure_supported(self, operation: Operation) -> None:
        if not self.supports(operation):
            raise UnsupportedOperationError(
                f"{self.display_name} does not support {operation.value}"
            )

    @abstractmethod
    def build_request(
        self,
        operation: Operation,
        amount: int | None,
        source: PaymentSource | None,
        options: TransactionOptions,
    ) -> ProviderRequest:
        """
        Translate a canonical call into the provider's request.

        Args:
            operation: Canonical operation
            amount: Amount in minor units, or None when the operation has none
            source: CreditCard, stored card reference, or authorization token
            options: Recognized transaction options

        Returns:
            ProviderRequest with method, url, ordered params and headers

        Raises:
            MissingOptionError: the provider needs an option that is absent
            UnsupportedOperationError: the provider lacks this operation
        """
        pass

    @abstractmethod
    def parse_response(self, operation: Operation, fields: dict[str, Any]) -> ProviderOutcome:
        """Extract result/message/authorization/codes from decoded fields."""
        pass

    def normalize_fields(self, operation: Operation, fields: dict[str, Any]) -> dict[str, Any]:
        """Hook to reshape decoded fields before they are exposed as params."""
        return fields

    def map_response(self, operation: Operation, fields: dict[str, Any]) -> Response:
        fields = self.normalize_fields(operation, fields)
        outcome = self.parse_response(operation, fields)
        return self.result_mapper.map(outcome, fields, test=self.test_mode)

    def headers(self) -> dict[str, str]:
        return {"Content-Type": self.codec.content_type}

    def scrub(self, transcript: str | bytes | None) -> str:
        return self.scrubber.scrub(transcript)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(test_mode={self.test_mode})"
