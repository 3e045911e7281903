"""Transport adapters.

Keep this package import-light: the webhook transport pulls in aiohttp, so
import concrete transports directly from their modules when needed.
"""

__all__ = []
