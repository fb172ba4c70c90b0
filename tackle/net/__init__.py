"""Network transport bootstrap."""

from .transport import (
    TRANSPORTS,
    NetworkHandle,
    TransportRegistry,
    http_handle,
    http_proxy,
    init_transports,
)

__all__ = [
    "NetworkHandle",
    "TRANSPORTS",
    "TransportRegistry",
    "http_handle",
    "http_proxy",
    "init_transports",
]
