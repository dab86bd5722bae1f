#!/usr/bin/env python3
"""Verify gateway configuration before starting the server.

Usage:
    python scripts/check_env.py            # report configuration
    python scripts/check_env.py --ping     # also call getHealth on the RPC
    python scripts/check_env.py --strict   # exit 1 if OKX credentials are missing
"""

import argparse
import asyncio
import sys
from urllib.parse import urlparse

from dotenv import load_dotenv

load_dotenv()

# Colors for output
GREEN = "\033[92m"
RED = "\033[91m"
YELLOW = "\033[93m"
RESET = "\033[0m"
CHECK = "✓"
CROSS = "✗"
WARN = "⚠"


def print_status(name: str, success: bool, message: str = ""):
    """Print status with color."""
    if success:
        print(f"  {GREEN}{CHECK}{RESET} {name}" + (f" - {message}" if message else ""))
    else:
        print(f"  {RED}{CROSS}{RESET} {name}" + (f" - {message}" if message else ""))


def print_warning(name: str, message: str = ""):
    """Print warning."""
    print(f"  {YELLOW}{WARN}{RESET} {name}" + (f" - {message}" if message else ""))


def check_credentials(settings) -> bool:
    print("\n🔑 OKX credentials...")
    missing = set(settings.missing_okx_credentials)
    for name in ("OKX_API_KEY", "OKX_SECRET_KEY", "OKX_API_PASSPHRASE", "OKX_PROJECT_ID"):
        if name in missing:
            print_warning(name, "not set (quotes and builds will use mock data)")
        else:
            print_status(name, True, "set")
    return not missing


def check_provider(settings) -> bool:
    print("\n🔌 Trading provider...")
    from swapgate.trading.factory import available_providers

    name = settings.trading_provider.lower()
    if name not in available_providers():
        print_status("TRADING_PROVIDER", False, f"unknown provider '{settings.trading_provider}'")
        return False
    print_status("TRADING_PROVIDER", True, name)
    return True


def check_rpc_url(settings) -> bool:
    print("\n🌐 Solana RPC...")
    parsed = urlparse(settings.sol_rpc_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        print_status("SOLANA_RPC_URL", False, f"invalid URL '{settings.sol_rpc_url}'")
        return False
    print_status("SOLANA_RPC_URL", True, settings.sol_rpc_url)
    return True


async def ping_rpc(settings) -> bool:
    from swapgate.trading.network import SolanaRpcClient, SolanaRpcError

    rpc = SolanaRpcClient(settings.sol_rpc_url, timeout=10.0)
    try:
        health = await rpc.get_health()
        print_status("getHealth", health == "ok", str(health))
        return health == "ok"
    except SolanaRpcError as e:
        print_status("getHealth", False, str(e))
        return False
    finally:
        await rpc.close()


def main() -> int:
    parser = argparse.ArgumentParser(description="Verify swapgate configuration")
    parser.add_argument("--ping", action="store_true", help="Call getHealth on the RPC node")
    parser.add_argument(
        "--strict", action="store_true", help="Fail when OKX credentials are missing"
    )
    args = parser.parse_args()

    from swapgate.config import get_settings

    settings = get_settings()
    print(f"Environment: {settings.environment}")

    ok = check_provider(settings)
    ok = check_rpc_url(settings) and ok
    credentials_ok = check_credentials(settings)
    if args.strict:
        ok = ok and credentials_ok

    if args.ping:
        ok = asyncio.run(ping_rpc(settings)) and ok

    print()
    if ok:
        print(f"{GREEN}Configuration OK{RESET}")
        return 0
    print(f"{RED}Configuration has problems{RESET}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
