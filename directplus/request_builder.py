"""
Request Builder.

One builder per public operation. Each builder checks the caller options the
operation cannot do without, then fills an ``OperationRequest`` with the
processor fields it needs.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Tuple

from directplus.contracts.interfaces import OperationKind, PaymentInstrument, TransactionOptions
from directplus.contracts.operations import REQUIRED_OPTIONS, VOID_CARD_NUMBER, VOID_EXPIRY
from directplus.encoding import format_expiry, split_authorization
from directplus.error_handler import PreconditionError

BuiltRequest = Tuple[OperationKind, "OperationRequest"]


@dataclass
class OperationRequest:
    reference: Optional[str] = None
    porteur: Optional[str] = None
    dateval: Optional[str] = None
    cvv: Optional[str] = None
    refabonne: Optional[str] = None
    numappel: Optional[str] = None
    numtrans: Optional[str] = None
    errorcodetest: Optional[str] = None

    def to_fields(self) -> Dict[str, Any]:
        """Only the fields that were actually set."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

    # -- field groups --

    def add_invoice(self, options: TransactionOptions) -> None:
        self.reference = options.order_id

    def add_credit_card(self, instrument: PaymentInstrument, options: TransactionOptions) -> None:
        self.porteur = options.credit_card_reference or instrument.number
        self.dateval = format_expiry(instrument)
        if instrument.verification_value:
            self.cvv = str(instrument.verification_value)

    def add_user_reference(self, options: TransactionOptions) -> None:
        self.refabonne = options.user_reference

    def add_reference(self, authorization: Optional[str]) -> None:
        self.numappel, self.numtrans = split_authorization(authorization)

    def add_test_error_code(self, options: TransactionOptions) -> None:
        if options.errorcodetest:
            self.errorcodetest = options.errorcodetest


def require_options(operation: str, options: TransactionOptions) -> None:
    missing = options.missing(*REQUIRED_OPTIONS[operation])
    if missing:
        raise PreconditionError(
            f"{operation} requires: {', '.join(missing)}",
            missing=missing,
        )


def build_purchase(instrument: PaymentInstrument, options: TransactionOptions) -> BuiltRequest:
    require_options("purchase", options)
    request = OperationRequest()
    request.add_invoice(options)
    request.add_credit_card(instrument, options)
    request.add_user_reference(options)
    request.add_test_error_code(options)
    return OperationKind.SUBSCRIBER_PURCHASE, request


def build_authorize(instrument: PaymentInstrument, options: TransactionOptions) -> BuiltRequest:
    require_options("authorize", options)
    request = OperationRequest()
    request.add_invoice(options)
    request.add_credit_card(instrument, options)
    request.add_user_reference(options)
    request.add_test_error_code(options)
    return OperationKind.SUBSCRIBER_AUTHORIZE, request


def build_capture(authorization: str, options: TransactionOptions) -> BuiltRequest:
    require_options("capture", options)
    request = OperationRequest()
    request.add_invoice(options)
    request.add_reference(authorization)
    request.add_user_reference(options)
    request.add_test_error_code(options)
    return OperationKind.SUBSCRIBER_CAPTURE, request


def build_refund(authorization: str, options: TransactionOptions) -> BuiltRequest:
    require_options("refund", options)
    request = OperationRequest()
    request.add_invoice(options)
    request.add_reference(authorization)
    request.add_user_reference(options)
    return OperationKind.REFUND, request


def build_void(authorization: str, options: TransactionOptions) -> BuiltRequest:
    require_options("void", options)
    request = OperationRequest()
    request.add_invoice(options)
    request.add_reference(authorization)
    request.add_user_reference(options)
    # Void carries no card data but the frame still reserves both positions.
    request.porteur = VOID_CARD_NUMBER
    request.dateval = VOID_EXPIRY
    return OperationKind.SUBSCRIBER_VOID, request


def build_credit(identification: str, options: TransactionOptions) -> BuiltRequest:
    require_options("credit", options)
    request = OperationRequest()
    request.add_invoice(options)
    request.add_reference(identification)
    request.add_user_reference(options)
    request.add_test_error_code(options)
    return OperationKind.SUBSCRIBER_CREDIT, request


def build_create_profile(instrument: PaymentInstrument, options: TransactionOptions) -> BuiltRequest:
    require_options("create_profile", options)
    request = OperationRequest()
    request.add_invoice(options)
    request.add_credit_card(instrument, options)
    request.add_user_reference(options)
    request.add_test_error_code(options)
    return OperationKind.SUBSCRIBER_CREATE, request


def build_update_profile(instrument: PaymentInstrument, options: TransactionOptions) -> BuiltRequest:
    require_options("update_profile", options)
    request = OperationRequest()
    request.add_credit_card(instrument, options)
    request.add_user_reference(options)
    request.add_test_error_code(options)
    return OperationKind.SUBSCRIBER_UPDATE, request


def build_destroy_profile(options: TransactionOptions) -> BuiltRequest:
    require_options("destroy_profile", options)
    request = OperationRequest()
    request.add_user_reference(options)
    request.add_test_error_code(options)
    return OperationKind.SUBSCRIBER_DESTROY, request
