"""
Contracts (data models and protocol tables).

Both the real httpx transport and the mock transport are driven through
these shapes, so the gateway never deals with ad-hoc dicts on the way in.
"""

from .interfaces import (
    Credentials,
    CreditCard,
    OperationKind,
    PaymentInstrument,
    TransactionOptions,
    Transport,
)
from .operations import (
    API_VERSION,
    CURRENCY_CODES,
    OPERATION_CODES,
    REQUIRED_OPTIONS,
    describe_response_code,
    standard_error_code,
)

__all__ = [
    # interfaces
    "Credentials", "CreditCard", "OperationKind", "PaymentInstrument",
    "TransactionOptions", "Transport",
    # operations
    "API_VERSION", "CURRENCY_CODES", "OPERATION_CODES", "REQUIRED_OPTIONS",
    "describe_response_code", "standard_error_code",
]
