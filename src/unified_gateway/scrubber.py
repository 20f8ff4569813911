"""
Transcript scrubbing.

A Scrubber redacts the values of sensitive fields (card number, verification
value, credentials) in a captured request/response transcript so that it can
be logged. Only values are replaced; field names, delimiters and every other
field are left byte-identical.
"""

import re
from typing import Iterable

FILTERED = "[FILTERED]"

# Value terminators for key=value pairs inside quoted transcript lines.
_FORM_VALUE = r"[^&\s\"']*"


class Scrubber:
    """
    Redacts sensitive values from transcripts.

    Args:
        form_fields: Names redacted in key=value (form-encoded) content
        json_fields: Names redacted in "Key":value (JSON) content, exact case
        header_fields: HTTP header names whose credential value is redacted
        marker: Replacement text for redacted values
    """

    def __init__(
        self,
        form_fields: Iterable[str] = (),
        json_fields: Iterable[str] = (),
        header_fields: Iterable[str] = (),
        marker: str = FILTERED,
    ) -> None:
        self.form_fields = tuple(dict.fromkeys(form_fields))
        self.json_fields = tuple(dict.fromkeys(json_fields))
        self.header_fields = tuple(dict.fromkeys(header_fields))
        self.marker = marker
        self._patterns = self._compile()

    def _compile(self) -> list[re.Pattern[str]]:
        patterns = []
        for name in self.form_fields:
            # Lookbehind stops "card_number" matching inside "stored_card_number"
            patterns.append(
                re.compile(rf"((?<![\w]){re.escape(name)}=){_FORM_VALUE}", re.IGNORECASE)
            )
        for name in self.json_fields:
            quoted_key = rf'(?<![\w])\\?"{re.escape(name)}\\?"\s*:\s*'
            patterns.append(re.compile(rf'({quoted_key}\\?")[^"\\]*'))
            patterns.append(re.compile(rf"({quoted_key})-?\d+(?:\.\d+)?"))
        for name in self.header_fields:
            patterns.append(
                re.compile(
                    rf"((?<![\w-]){re.escape(name)}:\s*(?:(?:Basic|Bearer)\s+)?)[^\s\"',]+",
                    re.IGNORECASE,
                )
            )
        return patterns

    def scrub(self, transcript: str | bytes | None) -> str:
        """Return the transcript with sensitive values replaced by the marker."""
        if transcript is None:
            return ""
        if isinstance(transcript, bytes):
            transcript = transcript.decode("utf-8", errors="replace")

        for pattern in self._patterns:
            transcript = pattern.sub(lambda match: match.group(1) + self.marker, transcript)
        return transcript

    def merge(self, other: "Scrubber") -> "Scrubber":
        """Scrubber redacting the union of both field sets."""
        return Scrubber(
            form_fields=self.form_fields + other.form_fields,
            json_fields=self.json_fields + other.json_fields,
            header_fields=self.header_fields + other.header_fields,
            marker=self.marker,
        )

    @property
    def sensitive_fields(self) -> tuple[str, ...]:
        return self.form_fields + self.json_fields + self.header_fields

    def __repr__(self) -> str:
        return f"Scrubber(fields={self.sensitive_fields!r})"
