"""
Transport collaborators.

- base.Transport: interface the lifecycle sends requests through
- httpx_transport.HttpxTransport: production HTTP transport
- sandbox.PlexoSandboxTransport: in-process emulation of Plexo's test API
"""

from unified_gateway.transports.base import Transport
from unified_gateway.transports.httpx_transport import HttpxTransport
from unified_gateway.transports.sandbox import PlexoSandboxTransport

__all__ = [
    "HttpxTransport",
    "PlexoSandboxTransport",
    "Transport",
]
