"""
Gateway factory for creating provider gateway instances.

Gateways are selected by explicit provider identifier, never by inspecting
the types of the caller's objects.
"""

from typing import Any

import structlog

from unified_gateway.config import settings
from unified_gateway.gateways.base import Gateway
from unified_gateway.gateways.merchant_e_solutions import MerchantESolutionsGateway
from unified_gateway.gateways.plexo import PlexoGateway
from unified_gateway.scrubber import Scrubber

logger = structlog.get_logger(__name__)


class GatewayFactory:
    """
    Factory for creating gateway instances.

    Supports:
    - Multiple providers behind one canonical interface
    - Per-merchant credentials passed explicitly, or defaults from settings
    - Registering additional providers without editing this module
    """

    # Registry of available gateways
    _GATEWAYS: dict[str, type[Gateway]] = {
        MerchantESolutionsGateway.name: MerchantESolutionsGateway,
        PlexoGateway.name: PlexoGateway,
    }

    @classmethod
    def create_gateway(
        cls,
        gateway_name: str,
        gateway_config: dict[str, Any] | None = None,
        test_mode: bool | None = None,
    ) -> Gateway:
        """
        Create a gateway instance by name.

        Args:
            gateway_name: Provider identifier (e.g., "plexo", "merchant_e_solutions")
            gateway_config: Optional credentials. If not provided, uses settings.
            test_mode: Route to the provider sandbox. Defaults to settings.test_mode.

        Returns:
            Configured Gateway

        Raises:
            ValueError: gateway_name is not registered
            ConfigurationError: required credentials are empty or missing

        Examples:
            gateway = GatewayFactory.create_gateway(
                "plexo",
                gateway_config={"client_id": "...", "api_key": "..."},
            )
        """
        gateway_name_lower = gateway_name.lower()

        if gateway_name_lower not in cls._GATEWAYS:
            available = ", ".join(cls.list_gateways())
            raise ValueError(
                f"Unknown gateway: {gateway_name}. Available gateways: {available}"
            )

        gateway_class = cls._GATEWAYS[gateway_name_lower]

        if gateway_config is None:
            gateway_config = cls._get_default_config(gateway_name_lower)
        if test_mode is None:
            test_mode = settings.test_mode

        logger.info(
            "gateway_created",
            gateway_name=gateway_name_lower,
            gateway_class=gateway_class.__name__,
            test_mode=test_mode,
        )

        return gateway_class.from_config(gateway_config, test_mode=test_mode)

    @classmethod
    def _get_default_config(cls, gateway_name: str) -> dict[str, Any]:
        """Credentials for a gateway from settings (empty for unknown providers)."""
        provider_settings = getattr(settings, gateway_name, None)
        if provider_settings is None:
            return {}
        return provider_settings.model_dump()

    @classmethod
    def register_gateway(cls, name: str, gateway_class: type[Gateway]) -> None:
        """
        Register a new gateway type.

        Example:
            GatewayFactory.register_gateway("acme", AcmeGateway)
        """
        if not isinstance(gateway_class, type) or not issubclass(gateway_class, Gateway):
            raise TypeError(f"{getattr(gateway_class, '__name__', gateway_class)} must inherit from Gateway")

        cls._GATEWAYS[name.lower()] = gateway_class
        logger.info(
            "gateway_registered",
            gateway_name=name.lower(),
            gateway_class=gateway_class.__name__,
        )

    @classmethod
    def list_gateways(cls) -> list[str]:
        return sorted(cls._GATEWAYS.keys())

    @classmethod
    def combined_scrubber(cls) -> Scrubber:
        """Scrubber covering the sensitive fields of every registered gateway."""
        scrubber = Scrubber()
        for name in cls.list_gateways():
            scrubber = scrubber.merge(cls._GATEWAYS[name].scrubber)
        return scrubber


def get_gateway(
    gateway_name: str | None = None,
    gateway_config: dict[str, Any] | None = None,
    test_mode: bool | None = None,
) -> Gateway:
    """
    Convenience function to create a gateway.

    Args:
        gateway_name: Provider identifier (defaults to settings.default_gateway)
        gateway_config: Optional credentials
        test_mode: Optional sandbox flag

    Returns:
        Gateway instance
    """
    if gateway_name is None:
        gateway_name = settings.default_gateway

    return GatewayFactory.create_gateway(gateway_name, gateway_config, test_mode)


def scrub(transcript: str | bytes | None) -> str:
    """Scrub a transcript with every registered gateway's sensitive fields."""
    return GatewayFactory.combined_scrubber().scrub(transcript)
