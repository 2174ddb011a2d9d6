"""Redaction of sensitive Direct Plus fields in wire transcripts."""
import re

FILTERED = "[FILTERED]"

_SENSITIVE_FIELDS = re.compile(r"\b(CLE|PORTEUR|CVV|DATENAISS)=[^&\s\"]+")


def supports_scrubbing() -> bool:
    return True


def scrub(transcript: str) -> str:
    """Replace the values of CLE, PORTEUR, CVV and DATENAISS with a placeholder."""
    return _SENSITIVE_FIELDS.sub(rf"\1={FILTERED}", transcript)
