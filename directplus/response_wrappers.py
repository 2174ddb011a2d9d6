from __future__ import annotations

from typing import Any, Dict, Optional, Union
from urllib.parse import unquote_plus

from pydantic import BaseModel, ConfigDict, Field

from directplus.contracts.operations import (
    ALREADY_EXISTING_PROFILE_CODES,
    FAILURE_MESSAGE,
    FRAUD_CODES,
    SUCCESS_CODES,
    SUCCESS_MESSAGE,
    UNAVAILABILITY_CODES,
    UNKNOWN_PROFILE_CODES,
    standard_error_code,
)
from directplus.encoding import format_authorization

RESPONSE_ENCODING = "iso-8859-1"


class ProcessedResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    params: Dict[str, Any] = Field(default_factory=dict)
    authorization: str = ""
    fraud_review: bool = False
    error_code: Optional[str] = None
    standard_error_code: Optional[str] = None
    service_unavailable: bool = False
    unknown_profile: bool = False
    already_existing_profile: bool = False
    used_backup: bool = False
    test: bool = False

    @property
    def response_code(self) -> Optional[str]:
        return self.params.get("codereponse")


def parse_response(body: Union[bytes, str]) -> Dict[str, str]:
    """
    Decode a ``key=value&key=value`` reply into a flat mapping.

    Keys are lower-cased, values URL-unescaped and pairs without a value
    dropped. ``porteur`` is also exposed as ``credit_card_reference``.
    """
    if isinstance(body, bytes):
        body = body.decode(RESPONSE_ENCODING)

    results: Dict[str, str] = {}
    for pair in body.split("&"):
        key, _, value = pair.partition("=")
        if not key or not value:
            continue
        results[key.strip().lower()] = unquote_plus(value, encoding=RESPONSE_ENCODING)

    if results.get("porteur"):
        results["credit_card_reference"] = results["porteur"]
    return results


# ---------------------------------------------------------------------------
# Outcome classification
# ---------------------------------------------------------------------------

def success_from(response: Dict[str, Any]) -> bool:
    return response.get("codereponse") in SUCCESS_CODES


def fraud_review(response: Dict[str, Any]) -> bool:
    return response.get("codereponse") in FRAUD_CODES


def service_unavailable(response: Dict[str, Any]) -> bool:
    return response.get("codereponse") in UNAVAILABILITY_CODES


def unknown_customer_profile(response: Dict[str, Any]) -> bool:
    return response.get("codereponse") in UNKNOWN_PROFILE_CODES


def already_existing_customer_profile(response: Dict[str, Any]) -> bool:
    return response.get("codereponse") in ALREADY_EXISTING_PROFILE_CODES


def message_from(response: Dict[str, Any]) -> str:
    if success_from(response):
        return SUCCESS_MESSAGE
    return response.get("commentaire") or FAILURE_MESSAGE


def classify_response(
    response: Dict[str, Any],
    *,
    test: bool = False,
    used_backup: bool = False,
) -> ProcessedResponse:
    success = success_from(response)
    code = response.get("codereponse")
    return ProcessedResponse(
        success=success,
        message=message_from(response),
        params=dict(response),
        authorization=format_authorization(response.get("numappel"), response.get("numtrans")),
        fraud_review=fraud_review(response),
        error_code=None if success else code,
        standard_error_code=None if success else standard_error_code(code),
        service_unavailable=service_unavailable(response),
        unknown_profile=unknown_customer_profile(response),
        already_existing_profile=already_existing_customer_profile(response),
        used_backup=used_backup,
        test=test,
    )
