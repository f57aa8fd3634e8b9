"""Pick a transport backend based on configuration and availability."""

from importlib.util import find_spec

from moddex_bootstrap.config import BootstrapConfig
from moddex_bootstrap.constants import TRANSPORT_PROBE_ORDER
from moddex_bootstrap.core.transport.base import Transport
from moddex_bootstrap.exceptions import ToolMissingError
from moddex_bootstrap.logger import get_logger

logger = get_logger(__name__)

# Modules each backend needs at import time
_BACKEND_MODULES: dict[str, tuple[str, ...]] = {
    "requests": ("requests",),
    "aiohttp": ("aiohttp", "uvloop"),
}


def is_backend_available(name: str) -> bool:
    """Return True when every module the backend needs is importable."""
    return all(
        find_spec(module) is not None
        for module in _BACKEND_MODULES[name]
    )


def _create(name: str, config: BootstrapConfig) -> Transport:
    if name == "requests":
        from moddex_bootstrap.core.transport.requests_transport import (
            RequestsTransport,
        )

        return RequestsTransport(
            config.retry_attempts, config.timeout_seconds
        )

    from moddex_bootstrap.core.transport.aiohttp_transport import (
        AiohttpTransport,
    )

    return AiohttpTransport(config.retry_attempts, config.timeout_seconds)


def select_transport(config: BootstrapConfig) -> Transport:
    """Return the transport to use for this run.

    ``transport = auto`` probes requests first, then aiohttp. An explicit
    choice is honoured as long as its libraries are installed.

    Raises:
        ToolMissingError: If no usable backend is installed

    """
    if config.transport == "auto":
        candidates = TRANSPORT_PROBE_ORDER
    else:
        candidates = (config.transport,)

    for name in candidates:
        if is_backend_available(name):
            logger.debug("Using %s transport", name)
            return _create(name, config)
        logger.debug("Transport backend %s is not installed", name)

    msg = "no HTTP client library available (install requests or aiohttp)"
    raise ToolMissingError(msg, target=", ".join(candidates))
