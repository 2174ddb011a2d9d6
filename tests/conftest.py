"""Pytest fixtures for the Direct Plus gateway tests."""

import pytest

from directplus.clients.mocks.transport import MockTransport
from directplus.contracts.interfaces import CreditCard, TransactionOptions
from directplus.gateway import DirectPlusGateway
from directplus.utils.config_loader import GatewayConfig


@pytest.fixture
def credit_card():
    return CreditCard(number="1111222233334444", month=3, year=2027, verification_value="123")


@pytest.fixture
def options():
    return TransactionOptions(order_id="REF123", user_reference="USER123")


@pytest.fixture
def transport():
    """Scripted in-memory transport; approves everything unless replies are queued."""
    return MockTransport()


@pytest.fixture
def gateway(transport):
    return DirectPlusGateway("1999888032", "1999888I", config=GatewayConfig(test=True), transport=transport)
