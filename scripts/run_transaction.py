#!/usr/bin/env python3
"""
Run a profile lifecycle (create -> capture -> void) against Direct Plus and
print each stage to the terminal.

Usage (from repo root):
  python scripts/run_transaction.py              # mock transport, no network
  python scripts/run_transaction.py --real       # preprod platform, needs DIRECTPLUS_LOGIN/PASSWORD
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from directplus.clients.mocks.transport import MockTransport
from directplus.contracts.interfaces import CreditCard, TransactionOptions
from directplus.error_handler import ErrorHandler
from directplus.gateway import DirectPlusGateway
from directplus.utils.config_loader import load_gateway_config, load_gateway_config_from_env


def setup_logging(verbose: bool):
    """Log to terminal so every stage is visible."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


def print_stage(title: str, data: dict | str):
    """Print a stage header and data to the terminal."""
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)
    if isinstance(data, dict):
        print(json.dumps(data, indent=2, default=str))
    else:
        print(data)
    print()


async def run(args) -> int:
    config = load_gateway_config_from_env(load_gateway_config(args.config))
    if args.real:
        gateway = DirectPlusGateway.from_config(config)
    else:
        gateway = DirectPlusGateway("1999888032", "1999888I", config=config, transport=MockTransport())

    stamp = int(time.time() * 1_000_000)
    options = TransactionOptions(order_id=f"REF{stamp}", user_reference=f"USER{stamp}", currency=args.currency)
    card = CreditCard(number=args.card, month=12, year=2030, verification_value="123")

    profile = await gateway.create_payment_profile(args.amount, card, options)
    print_stage("CREATE PROFILE", profile.model_dump())
    if not profile.success:
        return 1

    capture = await gateway.capture(args.amount, profile.authorization, options)
    print_stage("CAPTURE", capture.model_dump())
    if not capture.success:
        return 1

    void = await gateway.void(args.amount, capture.authorization, options)
    print_stage("VOID", void.model_dump())
    return 0 if void.success else 1


def main():
    parser = argparse.ArgumentParser(description="Direct Plus profile lifecycle demo")
    parser.add_argument("--real", action="store_true", help="Use the httpx transport instead of the mock")
    parser.add_argument("--config", type=Path, default=None, help="Gateway YAML config")
    parser.add_argument("--amount", type=int, default=100, help="Amount in cents")
    parser.add_argument("--currency", default="EUR")
    parser.add_argument("--card", default="1111222233334444")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log scrubbed wire payloads")
    args = parser.parse_args()

    setup_logging(args.verbose)
    try:
        code = asyncio.run(run(args))
    except Exception as exc:
        print_stage("FAILED", ErrorHandler().handle_exception(exc, context={"real": args.real}))
        code = 2
    sys.exit(code)


if __name__ == "__main__":
    main()
