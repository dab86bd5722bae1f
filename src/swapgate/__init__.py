"""Swapgate - non-custodial swap gateway for the OKX DEX aggregator on Solana."""

__version__ = "0.1.0"
