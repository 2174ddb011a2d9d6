"""
Paybox Direct Plus gateway.

Public payment and profile operations are built by ``request_builder``,
encoded by ``encoding`` and committed here: the body goes to the primary
endpoint of the current platform and, when the processor reports itself
unavailable, once more to the backup endpoint.
"""

from __future__ import annotations

import logging
from typing import Optional

from directplus.clients.real_http.transport import HttpxTransport
from directplus.contracts.interfaces import (
    Credentials,
    OperationKind,
    PaymentInstrument,
    TransactionOptions,
    Transport,
)
from directplus.contracts.operations import CURRENCY_CODES, describe_response_code
from directplus import request_builder as builders
from directplus.encoding import build_post_data, format_amount
from directplus.error_handler import ConfigurationError, UnsupportedCurrencyError
from directplus.request_builder import OperationRequest, require_options
from directplus.response_wrappers import (
    ProcessedResponse,
    classify_response,
    parse_response,
    service_unavailable,
)
from directplus.scrubber import scrub
from directplus.utils.config_loader import GatewayConfig

logger = logging.getLogger(__name__)

VERIFY_AMOUNT = 100


class DirectPlusGateway:
    supported_countries = ["FR"]
    default_currency = "EUR"
    supported_cardtypes = ["visa", "master", "american_express", "diners_club", "jcb"]
    homepage_url = "http://www.paybox.com/"
    display_name = "Paybox Direct Plus"
    money_format = "cents"

    def __init__(
        self,
        login: str,
        password: str,
        config: Optional[GatewayConfig] = None,
        transport: Optional[Transport] = None,
    ) -> None:
        self.credentials = Credentials.from_login(login, password)
        self.config = config or GatewayConfig()
        self.transport = transport or HttpxTransport(timeout_seconds=self.config.timeout_seconds)

    @classmethod
    def from_config(cls, config: GatewayConfig, transport: Optional[Transport] = None) -> "DirectPlusGateway":
        if not config.login or not config.password:
            raise ConfigurationError("Direct Plus login and password are not configured.")
        return cls(config.login, config.password, config=config, transport=transport)

    @property
    def test(self) -> bool:
        return self.config.test

    def payment_profiles_supported(self) -> bool:
        return True

    # ------------------------------------------------------------------
    # Payments
    # ------------------------------------------------------------------

    async def purchase(
        self, money: Optional[int], payment: PaymentInstrument, options: Optional[TransactionOptions] = None
    ) -> ProcessedResponse:
        options = options or TransactionOptions()
        kind, request = builders.build_purchase(payment, options)
        return await self.commit(kind, money, request, options)

    async def authorize(
        self, money: Optional[int], payment: PaymentInstrument, options: Optional[TransactionOptions] = None
    ) -> ProcessedResponse:
        options = options or TransactionOptions()
        kind, request = builders.build_authorize(payment, options)
        return await self.commit(kind, money, request, options)

    async def capture(
        self, money: Optional[int], authorization: str, options: Optional[TransactionOptions] = None
    ) -> ProcessedResponse:
        options = options or TransactionOptions()
        kind, request = builders.build_capture(authorization, options)
        return await self.commit(kind, money, request, options)

    async def refund(
        self, money: Optional[int], authorization: str, options: Optional[TransactionOptions] = None
    ) -> ProcessedResponse:
        options = options or TransactionOptions()
        kind, request = builders.build_refund(authorization, options)
        return await self.commit(kind, money, request, options)

    async def void(
        self, money: Optional[int], authorization: str, options: Optional[TransactionOptions] = None
    ) -> ProcessedResponse:
        options = options or TransactionOptions()
        kind, request = builders.build_void(authorization, options)
        return await self.commit(kind, money, request, options)

    async def credit(
        self, money: Optional[int], identification: str, options: Optional[TransactionOptions] = None
    ) -> ProcessedResponse:
        options = options or TransactionOptions()
        kind, request = builders.build_credit(identification, options)
        return await self.commit(kind, money, request, options)

    async def verify(
        self, payment: PaymentInstrument, options: Optional[TransactionOptions] = None
    ) -> ProcessedResponse:
        """Authorize a nominal amount, then void it. Only the authorize outcome is reported."""
        options = options or TransactionOptions()
        # Both steps are checked up front so the void never fails on input.
        require_options("verify", options)

        authorization = await self.authorize(VERIFY_AMOUNT, payment, options)
        void = await self.void(VERIFY_AMOUNT, authorization.authorization, options)
        if not void.success:
            logger.info("Verification void was not accepted (%s); ignoring", void.error_code)
        return authorization

    # ------------------------------------------------------------------
    # Payment profiles
    # ------------------------------------------------------------------

    async def create_payment_profile(
        self, money: Optional[int], credit_card: PaymentInstrument, options: Optional[TransactionOptions] = None
    ) -> ProcessedResponse:
        options = options or TransactionOptions()
        kind, request = builders.build_create_profile(credit_card, options)
        return await self.commit(kind, money, request, options)

    async def update_payment_profile(
        self, money: Optional[int], credit_card: PaymentInstrument, options: Optional[TransactionOptions] = None
    ) -> ProcessedResponse:
        options = options or TransactionOptions()
        kind, request = builders.build_update_profile(credit_card, options)
        return await self.commit(kind, money, request, options)

    async def destroy_payment_profile(
        self, money: Optional[int], options: Optional[TransactionOptions] = None
    ) -> ProcessedResponse:
        options = options or TransactionOptions()
        kind, request = builders.build_destroy_profile(options)
        return await self.commit(kind, money, request, options)

    # ------------------------------------------------------------------
    # Commit
    # ------------------------------------------------------------------

    def currency_code(self, options: TransactionOptions) -> str:
        currency = (options.currency or self.config.default_currency or self.default_currency).upper()
        if currency not in CURRENCY_CODES:
            raise UnsupportedCurrencyError(currency)
        return CURRENCY_CODES[currency]

    def post_data(self, kind: OperationKind, money: Optional[int], request: OperationRequest, options: TransactionOptions) -> str:
        return build_post_data(
            kind,
            request.to_fields(),
            self.credentials,
            amount=format_amount(money),
            currency_code=self.currency_code(options),
        )

    async def commit(
        self,
        kind: OperationKind,
        money: Optional[int],
        request: OperationRequest,
        options: TransactionOptions,
    ) -> ProcessedResponse:
        body = self.post_data(kind, money, request, options)
        endpoints = self.config.endpoints

        url = endpoints.primary(self.test)
        logger.debug("Direct Plus %s -> %s: %s", kind.value, url, scrub(body))
        response = parse_response(await self.transport.post(url, body))

        used_backup = False
        if service_unavailable(response):
            backup_url = endpoints.backup(self.test)
            logger.warning(
                "Direct Plus %s unavailable at %s (%s); retrying on %s",
                kind.value, url, response.get("codereponse"), backup_url,
            )
            response = parse_response(await self.transport.post(backup_url, body))
            used_backup = True

        result = classify_response(response, test=self.test, used_backup=used_backup)
        if result.success:
            logger.info("Direct Plus %s approved (authorization=%s)", kind.value, result.authorization)
        else:
            logger.info(
                "Direct Plus %s declined with %s: %s",
                kind.value, result.error_code, describe_response_code(result.error_code),
            )
        return result
