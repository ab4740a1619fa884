from __future__ import annotations

import argparse
import logging

from .config import Settings
from .oracle import NUM_WORDS, REQUEST_CONFIRMATIONS
from .project_constants import to_ether
from .verify import verify_audit


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def cmd_config(args: argparse.Namespace) -> int:
    settings = Settings.from_env(network_override=args.network)
    log = logging.getLogger("config")
    log.debug("Resolved settings: %s", settings)

    raffle = settings.raffle
    print("========================================")
    print("🎟  VRF RAFFLE CONFIGURATION")
    print("========================================")
    print(f"Network        : {settings.network}")
    print(f"Development    : {settings.is_development}")
    print(f"Entrance fee   : {to_ether(raffle.entrance_fee)} ({raffle.entrance_fee} wei)")
    print(f"Interval       : {raffle.interval} s")
    print(f"Key hash       : {raffle.key_hash}")
    print(f"Subscription   : {raffle.subscription_id}")
    print(f"Callback gas   : {raffle.callback_gas_limit}")
    print(f"Confirmations  : {REQUEST_CONFIRMATIONS}")
    print(f"Words/request  : {NUM_WORDS}")
    if settings.vrf_coordinator:
        print(f"Coordinator    : {settings.vrf_coordinator}")
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    result = verify_audit(args.audit)
    print("✅ AUDIT VERIFIED")
    print(f"Request       : {result['request_id']}")
    print(f"Winner        : {result['winner']}")
    print(f"Winner index  : {result['winner_index']} of {result['pool_size']}")
    print(f"Winner tickets: {result['winner_tickets']}")
    print(f"Payout        : {to_ether(result['amount'])}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="vrf-raffle",
        description="Inspect raffle configuration and verify settlement audits.",
    )
    p.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    p.add_argument("--network", default=None, help="Override network (else NETWORK env).")

    sub = p.add_subparsers(dest="cmd", required=True)

    c = sub.add_parser("config", help="Print the resolved raffle configuration.")
    c.set_defaults(func=cmd_config)

    v = sub.add_parser(
        "verify", help="Verify an existing settlement audit deterministically."
    )
    v.add_argument("--audit", required=True, help="Path to audit JSON.")
    v.set_defaults(func=cmd_verify)

    return p


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    raise SystemExit(args.func(args))
