"""HTTP transports."""

from src.libs.transport.base_transport import BaseHttpTransport
from src.libs.transport.httpx_transport import HttpxTransport

__all__ = ["BaseHttpTransport", "HttpxTransport"]
