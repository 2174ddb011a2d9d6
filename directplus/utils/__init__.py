"""
Utility modules for the Direct Plus adapter
"""
from .config_loader import EndpointConfig, GatewayConfig, load_gateway_config, load_gateway_config_from_env

__all__ = [
    'EndpointConfig',
    'GatewayConfig',
    'load_gateway_config',
    'load_gateway_config_from_env',
]
