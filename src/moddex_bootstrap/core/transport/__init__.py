"""HTTP transports used to talk to the release host.

Backends are imported lazily by select_transport() so that a missing
optional library only matters when that backend is chosen.
"""

from moddex_bootstrap.core.transport.base import Transport, is_retryable
from moddex_bootstrap.core.transport.selection import (
    is_backend_available,
    select_transport,
)

__all__ = [
    "Transport",
    "is_backend_available",
    "is_retryable",
    "select_transport",
]
