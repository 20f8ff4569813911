"""
AVS and CVV code tables.

These are process-wide, read-only lookups built once at import time. Each
gateway names the tables it uses (`Gateway.avs_codes`, `Gateway.cvv_codes`)
since providers do not share a single vocabulary; the card-network letter
codes below are what most US processors return.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from unified_gateway.models.response import CvvClassification, MatchResult


@dataclass(frozen=True)
class AvsEntry:
    message: str
    street_match: MatchResult
    postal_match: MatchResult


@dataclass(frozen=True)
class CvvEntry:
    message: str
    classification: CvvClassification


_AVS_MESSAGES = {
    "A": "Street address matches, but postal code does not match.",
    "B": "Street address matches, but postal code not verified.",
    "C": "Street address and postal code do not match.",
    "D": "Street address and postal code match.",
    "E": "AVS data is invalid or AVS is not allowed for this card type.",
    "F": "Card member's name does not match, but billing postal code matches.",
    "G": "Non-U.S. issuing bank does not support AVS.",
    "H": "Card member's name does not match. Street address and postal code match.",
    "I": "Address not verified.",
    "J": (
        "Card member's name, billing address, and postal code match. Shipping information "
        "verified and chargeback protection guaranteed through the Fraud Protection Program."
    ),
    "K": "Card member's name matches but billing address and billing postal code do not match.",
    "L": "Card member's name and billing postal code match, but billing address does not match.",
    "M": "Street address and postal code match.",
    "N": "Street address and postal code do not match.",
    "O": "Card member's name and billing address match, but billing postal code does not match.",
    "P": "Postal code matches, but street address not verified.",
    "Q": (
        "Card member's name, billing address, and postal code match. Shipping information "
        "verified but chargeback protection not guaranteed."
    ),
    "R": "System unavailable.",
    "S": "U.S.-issuing bank does not support AVS.",
    "T": "Card member's name does not match, but street address matches.",
    "U": "Address information unavailable.",
    "V": "Card member's name, billing address, and billing postal code match.",
    "W": "Street address does not match, but 9-digit postal code matches.",
    "X": "Street address and 9-digit postal code match.",
    "Y": "Street address and 5-digit postal code match.",
    "Z": "Street address does not match, but 5-digit postal code matches.",
}

_STREET_MATCH = {
    MatchResult.MATCH: "ABDHJMOQTVXY",
    MatchResult.NO_MATCH: "CKLNWZ",
}

_POSTAL_MATCH = {
    MatchResult.MATCH: "DHFJLMPQVWXYZ",
    MatchResult.NO_MATCH: "ACKNO",
}


def _match_for(code: str, table: dict[MatchResult, str]) -> MatchResult:
    for result, codes in table.items():
        if code in codes:
            return result
    return MatchResult.UNAVAILABLE


STANDARD_AVS_CODES: Mapping[str, AvsEntry] = MappingProxyType(
    {
        code: AvsEntry(
            message=message,
            street_match=_match_for(code, _STREET_MATCH),
            postal_match=_match_for(code, _POSTAL_MATCH),
        )
        for code, message in _AVS_MESSAGES.items()
    }
)

STANDARD_CVV_CODES: Mapping[str, CvvEntry] = MappingProxyType(
    {
        "D": CvvEntry("CVV check flagged transaction as suspicious", CvvClassification.DOES_NOT_MATCH),
        "I": CvvEntry("CVV failed data validation check", CvvClassification.DOES_NOT_MATCH),
        "M": CvvEntry("CVV matches", CvvClassification.MATCHES),
        "N": CvvEntry("CVV does not match", CvvClassification.DOES_NOT_MATCH),
        "P": CvvEntry("CVV not processed", CvvClassification.NOT_PROCESSED),
        "S": CvvEntry("CVV should have been present", CvvClassification.NOT_PROCESSED),
        "U": CvvEntry("CVV request unable to be processed by issuer", CvvClassification.UNAVAILABLE),
        "X": CvvEntry("Card does not support verification", CvvClassification.UNAVAILABLE),
    }
)
