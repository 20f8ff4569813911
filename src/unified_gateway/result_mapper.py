"""Map provider outcomes onto the canonical Response."""

from typing import Any, Collection, Mapping

import structlog

from unified_gateway.code_tables import AvsEntry, CvvEntry
from unified_gateway.models.response import (
    AvsResult,
    CvvClassification,
    CvvResult,
    FailureKind,
    MatchResult,
    ProviderCode,
    ProviderOutcome,
    Response,
)

logger = structlog.get_logger(__name__)

DEFAULT_DECLINE_MESSAGE = "Transaction declined"


class ResultMapper:
    """
    Turns a ProviderOutcome into a Response using a provider's code tables.

    Args:
        success_codes: Result codes that mean the provider approved the call
        avs_codes: AVS code table for this provider
        cvv_codes: CVV code table for this provider
    """

    def __init__(
        self,
        success_codes: Collection[ProviderCode],
        avs_codes: Mapping[str, AvsEntry],
        cvv_codes: Mapping[str, CvvEntry],
    ) -> None:
        self.success_codes = frozenset(success_codes)
        self.avs_codes = avs_codes
        self.cvv_codes = cvv_codes

    def map(
        self,
        outcome: ProviderOutcome,
        params: dict[str, Any],
        test: bool = False,
    ) -> Response:
        success = outcome.result_code in self.success_codes

        message = outcome.message
        if not message:
            message = "Transaction approved" if success else DEFAULT_DECLINE_MESSAGE

        response = Response(
            success=success,
            message=message,
            params=params,
            authorization=outcome.authorization,
            error_code=None if success else outcome.error_code,
            avs_result=self.avs_result(outcome.avs_code),
            cvv_result=self.cvv_result(outcome.cvv_code),
            test=test,
            failure_kind=None if success else FailureKind.DECLINED,
        )

        if not success:
            logger.info(
                "gateway_transaction_declined",
                result_code=outcome.result_code,
                error_code=outcome.error_code,
                message=message,
            )
        return response

    def avs_result(self, code: str | None) -> AvsResult | None:
        if not code:
            return None

        entry = self.avs_codes.get(code.upper())
        if entry is None:
            # Unknown codes are reported, not rejected
            return AvsResult(
                code=code,
                message=None,
                street_match=MatchResult.UNAVAILABLE,
                postal_match=MatchResult.UNAVAILABLE,
            )
        return AvsResult(
            code=code,
            message=entry.message,
            street_match=entry.street_match,
            postal_match=entry.postal_match,
        )

    def cvv_result(self, code: str | None) -> CvvResult | None:
        if not code:
            return None

        entry = self.cvv_codes.get(code.upper())
        if entry is None:
            return CvvResult(code=code, message=None, classification=CvvClassification.UNAVAILABLE)
        return CvvResult(code=code, message=entry.message, classification=entry.classification)
