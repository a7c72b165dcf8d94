"""DNS existence check for submitted URLs."""

import asyncio
import logging
import socket
from typing import Optional

from shorturl.core.config import settings

logger = logging.getLogger(__name__)


class HostnameValidator:
    """
    Accepts a hostname only when it resolves through DNS.

    Resolution runs through the event loop's ``getaddrinfo`` so a slow
    resolver never blocks other requests.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = settings.DNS_LOOKUP_TIMEOUT if timeout is None else timeout

    async def validate(self, hostname: str) -> bool:
        """
        Check that a hostname resolves.

        Args:
            hostname: Output of ``normalize_url``

        Returns:
            bool: True if the name resolves, False on any lookup failure
        """
        if not hostname or not hostname.strip():
            return False

        try:
            await asyncio.wait_for(self._resolve(hostname), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.info(f"DNS lookup timed out for hostname: {hostname!r}")
            return False
        except (socket.gaierror, UnicodeError, ValueError, OSError) as e:
            logger.info(f"DNS lookup failed for hostname {hostname!r}: {e}")
            return False
        return True

    async def _resolve(self, hostname: str):
        loop = asyncio.get_running_loop()
        return await loop.getaddrinfo(hostname, None, proto=socket.IPPROTO_TCP)
