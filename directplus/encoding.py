"""
Field Encoder and Identifier Generator.

Turns a request mapping into the processor's upper-cased, URL-escaped
``KEY=value&KEY=value`` body and produces the per-request identifiers the
protocol expects.
"""

from __future__ import annotations

import numbers
from datetime import datetime
from typing import Any, Mapping, Optional, Tuple
from urllib.parse import quote_plus

from directplus.contracts.interfaces import Credentials, OperationKind, PaymentInstrument
from directplus.contracts.operations import (
    ACTIVITY_CODE,
    API_VERSION,
    MAX_QUESTION_NUMBER,
    OPERATION_CODES,
)
from directplus.error_handler import PreconditionError

AMOUNT_WIDTH = 10
MAX_AMOUNT = 10 ** AMOUNT_WIDTH
HALF_WIDTH = 10


def unique_request_id(seed: Any = 0, now: Optional[datetime] = None) -> str:
    """Return a 10-digit question number derived from ``seed`` and the current microsecond."""
    now = now or datetime.now()
    randkey = int(f"{abs(hash(seed))}{now.microsecond}") % MAX_QUESTION_NUMBER
    return str(randkey).zfill(10)


def format_authorization(call_number: Optional[str], transaction_number: Optional[str]) -> str:
    return f"{call_number or ''}{transaction_number or ''}"


def split_authorization(token: Optional[str]) -> Tuple[str, str]:
    # Short tokens give short halves; the processor rejects them.
    token = token or ""
    return token[:HALF_WIDTH], token[HALF_WIDTH:HALF_WIDTH * 2]


def format_amount(money: Optional[int]) -> str:
    """Zero-pad an amount in cents to the 10-digit MONTANT field."""
    if money is None:
        return "0" * AMOUNT_WIDTH
    if isinstance(money, bool) or not isinstance(money, numbers.Integral):
        raise PreconditionError(f"amount must be a whole number of cents, got {money!r}", missing=["amount"])
    if not 0 <= money < MAX_AMOUNT:
        raise PreconditionError(f"amount {money} does not fit the 10-digit MONTANT field", missing=["amount"])
    return str(int(money)).zfill(AMOUNT_WIDTH)


def format_expiry(instrument: PaymentInstrument) -> str:
    """MMYY, e.g. March 2027 -> 0327."""
    year = f"{int(instrument.year):04d}"
    month = f"{int(instrument.month):02d}"
    return f"{month}{year[-2:]}"


def format_timestamp(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).strftime("%d%m%Y%H%M%S")


def encode_fields(fields: Mapping[str, Any]) -> str:
    return "&".join(
        f"{str(key).upper()}={quote_plus('' if value is None else str(value))}"
        for key, value in fields.items()
    )


def build_post_data(
    kind: OperationKind,
    fields: Mapping[str, Any],
    credentials: Credentials,
    *,
    amount: str,
    currency_code: str,
    now: Optional[datetime] = None,
) -> str:
    """Add the protocol-fixed fields to ``fields`` and encode the whole body."""
    reference = fields.get("reference")
    parameters = dict(fields)
    parameters.update(
        montant=amount,
        devise=currency_code,
        version=API_VERSION,
        type=OPERATION_CODES[kind],
        dateq=format_timestamp(now),
        numquestion=unique_request_id(reference, now),
        site=credentials.site,
        rang=credentials.rang,
        cle=credentials.key,
        pays="",
        archivage=reference or "",
        activite=ACTIVITY_CODE,
    )
    return encode_fields(parameters)
