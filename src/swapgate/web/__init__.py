"""Web boundary layer for non-custodial operations.

SECURITY PRINCIPLES:
1. This layer never sees private keys. Transactions are built unsigned
   and come back already signed by the user's wallet.
2. Nothing submitted through this layer is stored; every request is
   handled statelessly.
"""

__all__ = [
    "contracts",
    "controllers",
]
