import logging

logging.getLogger("asyncio").setLevel(logging.ERROR)


from .fixtures import (
    closed_port,
    connect,
    highlight_service,
    service_settings,
    threaded_service,
)


__all__ = [
    "closed_port",
    "connect",
    "highlight_service",
    "service_settings",
    "threaded_service",
]
