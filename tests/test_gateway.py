import re

import httpx
import pytest

from directplus.clients.mocks.transport import MockTransport, build_reply
from directplus.contracts.interfaces import CreditCard, TransactionOptions
from directplus.contracts.operations import CURRENCY_CODES
from directplus.error_handler import ConfigurationError, PreconditionError, UnsupportedCurrencyError
from directplus.gateway import DirectPlusGateway
from directplus.utils.config_loader import EndpointConfig, GatewayConfig

APPROVED = build_reply(numappel="0000974112", numtrans="0000782033", codereponse="00000", porteur="SLDLrcsLMPC")
UNAVAILABLE = build_reply(codereponse="00001", commentaire="PAYBOX : Timeout")
DECLINED = build_reply(codereponse="00021", commentaire="Carte non autorisee")

ENDPOINTS = EndpointConfig(
    test_url="https://primary.test/PPPS.php",
    test_backup_url="https://backup.test/PPPS.php",
    live_url="https://primary.live/PPPS.php",
    live_backup_url="https://backup.live/PPPS.php",
)


def make_gateway(transport, test=True):
    return DirectPlusGateway(
        "1999888032", "1999888I",
        config=GatewayConfig(test=test, endpoints=ENDPOINTS),
        transport=transport,
    )


@pytest.mark.asyncio
async def test_authorize_posts_to_primary_and_returns_authorization(credit_card, options):
    transport = MockTransport([APPROVED])
    response = await make_gateway(transport).authorize(100, credit_card, options)

    assert response.success is True
    assert response.message == "The transaction was approved"
    assert response.authorization == "00009741120000782033"
    assert response.test is True
    assert response.used_backup is False
    assert len(transport.calls) == 1
    assert transport.calls[0].url == "https://primary.test/PPPS.php"

    sent = transport.calls[0].fields
    assert sent["TYPE"] == "00051"
    assert sent["PORTEUR"] == "1111222233334444"
    assert sent["DATEVAL"] == "0327"
    assert sent["CVV"] == "123"
    assert sent["REFABONNE"] == "USER123"
    assert sent["REFERENCE"] == "REF123"


@pytest.mark.asyncio
async def test_live_mode_uses_live_endpoint(credit_card, options):
    transport = MockTransport([APPROVED])
    response = await make_gateway(transport, test=False).authorize(100, credit_card, options)
    assert response.test is False
    assert transport.calls[0].url == "https://primary.live/PPPS.php"


@pytest.mark.asyncio
async def test_every_request_carries_one_amount_and_currency(credit_card, options):
    transport = MockTransport()
    gateway = make_gateway(transport)
    stored = TransactionOptions(order_id="REF1", user_reference="USER1", credit_card_reference="SLDLrcsLMPC")
    authorization = "00009741120000782033"

    await gateway.purchase(100, credit_card, stored)
    await gateway.authorize(100, credit_card, options)
    await gateway.capture(100, authorization, options)
    await gateway.void(100, authorization, options)
    await gateway.refund(100, authorization, options)
    await gateway.credit(100, authorization, options)
    await gateway.create_payment_profile(100, credit_card, options)
    await gateway.update_payment_profile(None, credit_card, options)
    await gateway.destroy_payment_profile(None, options)

    assert len(transport.calls) == 9
    for call in transport.calls:
        assert call.body.count("MONTANT=") == 1
        assert call.body.count("DEVISE=") == 1
        assert re.fullmatch(r"\d{10}", call.fields["MONTANT"])
        assert call.fields["DEVISE"] in CURRENCY_CODES.values()


@pytest.mark.asyncio
async def test_unavailable_primary_fails_over_once_with_identical_body(credit_card, options):
    transport = MockTransport([UNAVAILABLE, APPROVED])
    response = await make_gateway(transport).authorize(100, credit_card, options)

    assert response.success is True
    assert response.used_backup is True
    assert [call.url for call in transport.calls] == [
        "https://primary.test/PPPS.php",
        "https://backup.test/PPPS.php",
    ]
    assert transport.calls[0].body == transport.calls[1].body


@pytest.mark.asyncio
async def test_unavailable_backup_is_returned_as_is(credit_card, options):
    transport = MockTransport([UNAVAILABLE, UNAVAILABLE, APPROVED])
    response = await make_gateway(transport, test=False).authorize(100, credit_card, options)

    assert len(transport.calls) == 2
    assert transport.calls[1].url == "https://backup.live/PPPS.php"
    assert response.success is False
    assert response.service_unavailable is True
    assert response.error_code == "00001"
    assert response.message == "PAYBOX : Timeout"


@pytest.mark.asyncio
async def test_business_decline_is_not_retried(credit_card, options):
    transport = MockTransport([DECLINED])
    response = await make_gateway(transport).authorize(100, credit_card, options)

    assert len(transport.calls) == 1
    assert response.success is False
    assert response.error_code == "00021"
    assert response.message == "Carte non autorisee"


@pytest.mark.asyncio
async def test_transport_errors_propagate_unmodified(credit_card, options):
    error = httpx.ConnectError("connection refused")
    transport = MockTransport([error])
    with pytest.raises(httpx.ConnectError) as exc:
        await make_gateway(transport).authorize(100, credit_card, options)
    assert exc.value is error
    assert len(transport.calls) == 1


@pytest.mark.asyncio
async def test_missing_user_reference_fails_before_sending(credit_card):
    transport = MockTransport()
    with pytest.raises(PreconditionError):
        await make_gateway(transport).authorize(100, credit_card, TransactionOptions(order_id="REF1"))
    assert transport.calls == []


@pytest.mark.asyncio
async def test_unsupported_currency_fails_before_sending(credit_card):
    transport = MockTransport()
    options = TransactionOptions(order_id="REF1", user_reference="USER1", currency="XYZ")
    with pytest.raises(UnsupportedCurrencyError):
        await make_gateway(transport).authorize(100, credit_card, options)
    assert transport.calls == []


@pytest.mark.asyncio
async def test_currency_option_overrides_default(credit_card):
    transport = MockTransport()
    options = TransactionOptions(order_id="REF1", user_reference="USER1", currency="usd")
    await make_gateway(transport).authorize(100, credit_card, options)
    assert transport.calls[0].fields["DEVISE"] == "840"


@pytest.mark.asyncio
async def test_void_sends_placeholder_card_data(options):
    transport = MockTransport()
    await make_gateway(transport).void(100, "00009741120000782033", options)
    sent = transport.calls[0].fields
    assert sent["TYPE"] == "00055"
    assert sent["PORTEUR"] == "000000000000000"
    assert sent["DATEVAL"] == "0000"
    assert sent["NUMAPPEL"] == "0000974112"
    assert sent["NUMTRANS"] == "0000782033"


@pytest.mark.asyncio
async def test_verify_reports_authorize_outcome_even_when_void_fails(credit_card, options):
    transport = MockTransport([APPROVED, DECLINED])
    response = await make_gateway(transport).verify(credit_card, options)

    assert response.success is True
    assert response.authorization == "00009741120000782033"
    assert [call.fields["TYPE"] for call in transport.calls] == ["00051", "00055"]
    assert transport.calls[0].fields["MONTANT"] == "0000000100"
    assert transport.calls[1].fields["NUMAPPEL"] == "0000974112"


@pytest.mark.asyncio
async def test_verify_reports_failed_authorize(credit_card, options):
    transport = MockTransport([DECLINED, DECLINED])
    response = await make_gateway(transport).verify(credit_card, options)
    assert response.success is False
    assert response.error_code == "00021"


@pytest.mark.asyncio
async def test_verify_checks_void_requirements_up_front(credit_card):
    transport = MockTransport()
    with pytest.raises(PreconditionError):
        await make_gateway(transport).verify(credit_card, TransactionOptions(user_reference="USER1"))
    assert transport.calls == []


@pytest.mark.asyncio
async def test_profile_lifecycle_with_stored_card_reference(credit_card, options):
    transport = MockTransport([APPROVED, APPROVED])
    gateway = make_gateway(transport)

    profile = await gateway.create_payment_profile(100, credit_card, options)
    reference = profile.params["credit_card_reference"]
    assert reference == "SLDLrcsLMPC"

    card = CreditCard(number=None, month=3, year=2027)
    options.credit_card_reference = reference
    purchase = await gateway.purchase(100, card, options)

    assert purchase.success is True
    assert transport.calls[0].fields["TYPE"] == "00056"
    assert transport.calls[1].fields["TYPE"] == "00053"
    assert transport.calls[1].fields["PORTEUR"] == "SLDLrcsLMPC"


@pytest.mark.asyncio
async def test_default_mock_reply_approves(gateway, transport, credit_card, options):
    response = await gateway.create_payment_profile(100, credit_card, options)
    assert response.success is True
    assert re.fullmatch(r"\d{20}", response.authorization)
    assert response.params["credit_card_reference"]
    assert transport.calls[0].url == "https://preprod-ppps.paybox.com/PPPS.php"


def test_gateway_metadata(gateway):
    assert gateway.supported_countries == ["FR"]
    assert gateway.default_currency == "EUR"
    assert gateway.money_format == "cents"
    assert gateway.display_name == "Paybox Direct Plus"
    assert gateway.payment_profiles_supported() is True
    assert gateway.credentials.site == "1999888"
    assert gateway.credentials.rang == "032"


def test_from_config_requires_credentials():
    with pytest.raises(ConfigurationError):
        DirectPlusGateway.from_config(GatewayConfig())

    gateway = DirectPlusGateway.from_config(GatewayConfig(login="1999888032", password="secret"))
    assert gateway.credentials.key == "secret"


@pytest.mark.asyncio
@pytest.mark.parametrize("money", [-100, 10_000_000_000, 12.5])
async def test_invalid_amount_fails_before_sending(credit_card, options, money):
    transport = MockTransport()
    with pytest.raises(PreconditionError):
        await make_gateway(transport).authorize(money, credit_card, options)
    assert transport.calls == []


@pytest.mark.asyncio
async def test_queued_replies_are_consumed_in_order(credit_card, options):
    transport = MockTransport()
    transport.queue(DECLINED)
    transport.queue(APPROVED.decode("ascii"))
    gateway = make_gateway(transport)

    first = await gateway.authorize(100, credit_card, options)
    second = await gateway.authorize(100, credit_card, options)

    assert first.success is False
    assert second.success is True
    assert second.authorization == "00009741120000782033"
