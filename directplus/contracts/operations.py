"""
Static Direct Plus protocol tables.

Operation codes, currency codes, required caller options per public operation
and the response code families used by the outcome classifier.
"""

from typing import Dict, FrozenSet, Optional, Tuple

from .interfaces import OperationKind

# 00103 for Paybox Direct, 00104 for Paybox Direct Plus
API_VERSION = "00104"
ACTIVITY_CODE = "027"

MAX_QUESTION_NUMBER = 2_147_483_647

VOID_CARD_NUMBER = "000000000000000"
VOID_EXPIRY = "0000"

OPERATION_CODES: Dict[OperationKind, str] = {
    OperationKind.AUTHORIZE: "00001",
    OperationKind.CAPTURE: "00002",
    OperationKind.PURCHASE: "00003",
    OperationKind.CREDIT: "00004",
    OperationKind.VOID: "00005",
    OperationKind.VERIFY: "00011",
    OperationKind.CAPTURE_DIRECTLY: "00012",  # capture without authorization
    OperationKind.REFUND: "00014",
    OperationKind.CONSULTATION: "00017",
    OperationKind.SUBSCRIBER_AUTHORIZE: "00051",
    OperationKind.SUBSCRIBER_CAPTURE: "00052",
    OperationKind.SUBSCRIBER_PURCHASE: "00053",
    OperationKind.SUBSCRIBER_CREDIT: "00054",
    OperationKind.SUBSCRIBER_VOID: "00055",
    OperationKind.SUBSCRIBER_CREATE: "00056",
    OperationKind.SUBSCRIBER_UPDATE: "00057",
    OperationKind.SUBSCRIBER_DESTROY: "00058",
    OperationKind.FORCE_CAPTURE_DIRECTLY: "00061",
}

_unmapped = set(OperationKind) - set(OPERATION_CODES)
if _unmapped:
    raise RuntimeError(f"Operation kinds without a wire code: {sorted(k.value for k in _unmapped)}")

CURRENCY_CODES: Dict[str, str] = {
    "AUD": "036",
    "CAD": "124",
    "CZK": "203",
    "DKK": "208",
    "HKD": "344",
    "ICK": "352",
    "JPY": "392",
    "NOK": "578",
    "SGD": "702",
    "SEK": "752",
    "CHF": "756",
    "GBP": "826",
    "USD": "840",
    "EUR": "978",
}

# Caller options each public operation cannot do without.
REQUIRED_OPTIONS: Dict[str, Tuple[str, ...]] = {
    "purchase": ("credit_card_reference", "user_reference"),
    "authorize": ("user_reference",),
    "capture": ("order_id", "user_reference"),
    "void": ("order_id", "user_reference"),
    "refund": (),
    "credit": (),
    "create_profile": ("user_reference",),
    "update_profile": (),
    "destroy_profile": (),
    "verify": ("user_reference", "order_id"),
}

# ---------------------------------------------------------------------------
# Response code families
# ---------------------------------------------------------------------------

SUCCESS_CODES: FrozenSet[str] = frozenset({"00000"})
UNAVAILABILITY_CODES: FrozenSet[str] = frozenset({"00001", "00017", "00097", "00098"})
UNKNOWN_PROFILE_CODES: FrozenSet[str] = frozenset({"00017"})
ALREADY_EXISTING_PROFILE_CODES: FrozenSet[str] = frozenset({"00016"})
FRAUD_CODES: FrozenSet[str] = frozenset({
    "00102", "00104", "00105", "00134", "00138",
    "00141", "00143", "00156", "00157", "00159",
})

SUCCESS_MESSAGE = "The transaction was approved"
FAILURE_MESSAGE = "The transaction failed"

STANDARD_ERROR_CODES: Dict[str, str] = {
    "00004": "invalid_number",
    "00008": "invalid_expiry_date",
    "00020": "invalid_cvc",
    "00021": "card_declined",
}

RESPONSE_CODE_DESCRIPTIONS: Dict[str, str] = {
    "00000": "Operation successful.",
    "00001": "Connection to the authorization centre failed or an internal error occurred; retry on the backup site.",
    "00002": "A consistency error occurred.",
    "00003": "Paybox error; retry on the backup site.",
    "00004": "Invalid card number.",
    "00005": "Invalid question number.",
    "00006": "Access refused or incorrect site / rang.",
    "00007": "Invalid date.",
    "00008": "Incorrect expiry date.",
    "00009": "Invalid operation type.",
    "00010": "Unknown currency.",
    "00011": "Incorrect amount.",
    "00012": "Invalid order reference.",
    "00013": "This version is no longer supported.",
    "00014": "Inconsistent frame received.",
    "00015": "Error accessing previously referenced data.",
    "00016": "Subscriber already exists.",
    "00017": "Unknown subscriber.",
    "00018": "Transaction not found.",
    "00020": "Card verification code missing.",
    "00021": "Card not authorized.",
    "00022": "Limit reached.",
    "00023": "Cardholder already seen today.",
    "00024": "Country code filtered for this merchant.",
    "00026": "Incorrect activity code.",
    "00040": "Cardholder enrolled but not authenticated.",
    "00097": "Connection timeout reached.",
    "00098": "Internal connection error.",
    "00099": "Question and answer mismatch; retry later.",
}


def standard_error_code(code: Optional[str]) -> Optional[str]:
    """Map a processor code onto a normalized decline category."""
    if not code:
        return None
    if code in STANDARD_ERROR_CODES:
        return STANDARD_ERROR_CODES[code]
    # 001xx: refused by the authorization centre
    if code.startswith("001"):
        return "card_declined"
    return None


def describe_response_code(code: Optional[str]) -> str:
    if not code:
        return "No response code returned."
    if code in RESPONSE_CODE_DESCRIPTIONS:
        return RESPONSE_CODE_DESCRIPTIONS[code]
    if code.startswith("001"):
        return "Payment refused by the authorization centre."
    return f"Unknown response code {code}."
