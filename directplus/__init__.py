"""
Paybox Direct Plus client adapter.

Builds Direct Plus request frames for payment and payment-profile operations,
commits them with primary/backup failover and normalizes the replies.
"""

from .contracts.interfaces import CreditCard, OperationKind, TransactionOptions, Transport
from .error_handler import (
    ConfigurationError,
    DirectPlusError,
    ErrorHandler,
    PreconditionError,
    UnsupportedCurrencyError,
)
from .gateway import DirectPlusGateway
from .response_wrappers import ProcessedResponse
from .scrubber import scrub
from .utils.config_loader import GatewayConfig, load_gateway_config, load_gateway_config_from_env

__all__ = [
    "CreditCard", "OperationKind", "TransactionOptions", "Transport",
    "ConfigurationError", "DirectPlusError", "ErrorHandler", "PreconditionError",
    "UnsupportedCurrencyError",
    "DirectPlusGateway", "ProcessedResponse", "scrub",
    "GatewayConfig", "load_gateway_config", "load_gateway_config_from_env",
]
