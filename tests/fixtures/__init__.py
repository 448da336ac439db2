from .service import (
    Connection,
    closed_port,
    connect,
    highlight_service,
    service_settings,
    threaded_service,
)

__all__ = [
    "Connection",
    "closed_port",
    "connect",
    "highlight_service",
    "service_settings",
    "threaded_service",
]
