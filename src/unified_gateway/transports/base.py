"""Base interface for the transport collaborator."""

from abc import ABC, abstractmethod
from collections import deque


class Transport(ABC):
    """
    Sends one encoded request and returns the provider's response body.

    Transports own connection handling, TLS and timeouts. The gateway layer
    never retries; a transport either returns exactly one body or raises
    TransportError once.

    Each exchange is recorded as a plain-text transcript so callers can
    scrub and log it. Transcripts contain raw card data until scrubbed.
    """

    def __init__(self, transcript_size: int = 20) -> None:
        self.transcript: deque[str] = deque(maxlen=transcript_size)
        # Total exchanges recorded; the bounded transcript length stops growing
        self.exchange_count = 0

    @abstractmethod
    def send(
        self,
        method: str,
        url: str,
        body: bytes,
        headers: dict[str, str],
    ) -> bytes:
        """
        Send a request to the provider.

        Args:
            method: HTTP method
            url: Absolute endpoint URL
            body: Encoded request body
            headers: Request headers (content type, credentials)

        Returns:
            Raw response body. Non-2xx responses with a body are returned
            too, since providers describe errors in the body.

        Raises:
            TransportError: The provider could not be reached.
        """
        pass

    @property
    def last_exchange(self) -> str:
        return self.transcript[-1] if self.transcript else ""

    def record(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: bytes,
        response_body: bytes | None,
        status_code: int | None = None,
    ) -> str:
        lines = [f"-> {method} {url}"]
        lines.extend(f"{name}: {value}" for name, value in headers.items())
        lines.append("")
        lines.append(body.decode("utf-8", errors="replace"))
        if response_body is not None:
            status = f" {status_code}" if status_code is not None else ""
            lines.append(f"<-{status}")
            lines.append(response_body.decode("utf-8", errors="replace"))
        exchange = "\n".join(lines)
        self.transcript.append(exchange)
        self.exchange_count += 1
        return exchange

    def close(self) -> None:
        """Release any held resources."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
