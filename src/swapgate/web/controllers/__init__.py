"""HTTP controllers for web API endpoints.

SECURITY: These controllers MUST NOT sign transactions or access
private keys. Signing always happens in the user's wallet.
"""

from swapgate.web.controllers.trading import router as trading_router

__all__ = [
    "trading_router",
]
