"""
Provider gateway integrations.

- base.Gateway: capability interface every provider implements
- merchant_e_solutions.MerchantESolutionsGateway: form-encoded Trident API
- plexo.PlexoGateway: JSON REST API
- factory: selection of a gateway by provider identifier
"""

from unified_gateway.gateways.base import Gateway
from unified_gateway.gateways.factory import GatewayFactory, get_gateway, scrub
from unified_gateway.gateways.merchant_e_solutions import MerchantESolutionsGateway
from unified_gateway.gateways.plexo import PlexoGateway

__all__ = [
    "Gateway",
    "GatewayFactory",
    "MerchantESolutionsGateway",
    "PlexoGateway",
    "get_gateway",
    "scrub",
]
