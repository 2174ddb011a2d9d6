from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, runtime_checkable

from directplus.error_handler import PreconditionError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class OperationKind(str, Enum):
    AUTHORIZE = "authorize"
    CAPTURE = "capture"
    PURCHASE = "purchase"
    CREDIT = "credit"
    VOID = "void"
    VERIFY = "verify"
    CAPTURE_DIRECTLY = "capture_directly"
    REFUND = "refund"
    CONSULTATION = "consultation"
    SUBSCRIBER_AUTHORIZE = "subscriber_authorize"
    SUBSCRIBER_CAPTURE = "subscriber_capture"
    SUBSCRIBER_PURCHASE = "subscriber_purchase"
    SUBSCRIBER_CREDIT = "subscriber_credit"
    SUBSCRIBER_VOID = "subscriber_void"
    SUBSCRIBER_CREATE = "subscriber_create"
    SUBSCRIBER_UPDATE = "subscriber_update"
    SUBSCRIBER_DESTROY = "subscriber_destroy"
    FORCE_CAPTURE_DIRECTLY = "force_capture_directly"


# ---------------------------------------------------------------------------
# Shared data models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Credentials:
    site: str
    rang: str
    key: str

    @classmethod
    def from_login(cls, login: str, password: str) -> "Credentials":
        """Split a merchant login into its 7-character site and the rang."""
        if not login:
            raise PreconditionError("login is required")
        if not password:
            raise PreconditionError("password is required")
        login = str(login)
        return cls(site=login[:7], rang=login[7:], key=password)


@runtime_checkable
class PaymentInstrument(Protocol):
    number: Optional[str]
    month: int
    year: int
    verification_value: Optional[str]


@dataclass
class CreditCard:
    number: Optional[str]
    month: int
    year: int
    verification_value: Optional[str] = None


@dataclass
class TransactionOptions:
    order_id: Optional[str] = None
    user_reference: Optional[str] = None
    credit_card_reference: Optional[str] = None
    currency: Optional[str] = None       # ISO alpha code, e.g. EUR
    errorcodetest: Optional[str] = None  # test platform only

    def missing(self, *names: str) -> list:
        return [name for name in names if not getattr(self, name)]


# ---------------------------------------------------------------------------
# Abstract transport interface
# ---------------------------------------------------------------------------

class Transport(ABC):
    """Performs the raw HTTP exchange with the processor."""

    @abstractmethod
    async def post(self, url: str, body: str) -> bytes:
        """POST an encoded body and return the raw response body."""
