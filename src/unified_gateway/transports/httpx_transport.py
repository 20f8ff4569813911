"""HTTP transport backed by httpx."""

import httpx
import structlog

from unified_gateway.models.exceptions import TransportError
from unified_gateway.transports.base import Transport

logger = structlog.get_logger(__name__)


class HttpxTransport(Transport):
    """
    Blocking HTTP transport using an httpx.Client connection pool.

    Args:
        timeout_seconds: Request timeout in seconds
        client: Optional preconfigured client (proxies, custom transports)
    """

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        client: httpx.Client | None = None,
        transcript_size: int = 20,
    ) -> None:
        super().__init__(transcript_size=transcript_size)
        self.timeout_seconds = timeout_seconds
        self.http_client = client or httpx.Client(timeout=timeout_seconds)

        logger.info("httpx_transport_initialized", timeout_seconds=timeout_seconds)

    def send(
        self,
        method: str,
        url: str,
        body: bytes,
        headers: dict[str, str],
    ) -> bytes:
        try:
            response = self.http_client.request(method, url, content=body, headers=headers)

        except httpx.TimeoutException as e:
            self.record(method, url, headers, body, None)
            logger.error("gateway_transport_timeout", url=url, error=str(e))
            raise TransportError(f"Gateway request timed out: {e}") from e

        except httpx.RequestError as e:
            # Connection refused, DNS failure, TLS errors
            self.record(method, url, headers, body, None)
            logger.error(
                "gateway_transport_request_error",
                url=url,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise TransportError(f"Gateway request failed: {e}") from e

        self.record(method, url, headers, body, response.content, response.status_code)

        if response.status_code >= 500 and not response.content:
            logger.error("gateway_transport_empty_error", url=url, status_code=response.status_code)
            raise TransportError(f"Gateway unavailable (status: {response.status_code})")

        logger.debug(
            "gateway_transport_response",
            url=url,
            status_code=response.status_code,
            body_length=len(response.content),
        )
        return response.content

    def close(self) -> None:
        """Close the HTTP client connection pool."""
        self.http_client.close()
