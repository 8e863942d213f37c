"""Network reachability probe used to decide whether detected changes fail the run."""

from __future__ import annotations

import logging
import socket

logger = logging.getLogger(__name__)


def is_network_reachable(host: str, port: int = 443, timeout: float = 3.0) -> bool:
    """Return True if a TCP connection to host:port can be opened within timeout."""
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError as e:
        logger.debug("Network probe to %s:%d failed: %s", host, port, e)
        return False
