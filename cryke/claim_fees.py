#!/usr/bin/env python3
"""
Cryke Fee Claimer - check and claim trading fees from Cryke tokens

Usage:
  cryke-fees check <token_address> [--owner <address>]
  cryke-fees claim <token_address>

Requires: BASE_PRIVATE_KEY (for claim, and for check without --owner)
"""
import argparse
import sys

from cryke.colors import C, info
from cryke.config import Config
from cryke.errors import CrykeError
from cryke.fee_ledger import FeeLedgerClient
from cryke.logs import setup_logging
from cryke.orchestrator import check_fees, claim_fees, signer_from_config

EPILOG = """
Environment:
  BASE_PRIVATE_KEY - Your wallet private key. For a wallet created by
                     cryke-launch, use the privateKeySecret field of
                     ~/.cryke/wallets/<SYMBOL>.json
  BASE_RPC_URL     - RPC endpoint (default: https://mainnet.base.org)
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cryke-fees",
        description="Check and claim your trading fees from Cryke tokens",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command", metavar="{check,claim}")
    sub.required = True

    check = sub.add_parser("check", help="Check pending fees")
    check.add_argument("token_address")
    check.add_argument("--owner", help="Fee owner to check (default: address of BASE_PRIVATE_KEY)")

    claim = sub.add_parser("claim", help="Claim all fees")
    claim.add_argument("token_address")
    return parser


def run_check(args, config: Config) -> bool:
    owner = args.owner or signer_from_config(config, "check fees for your wallet").address
    report = check_fees(FeeLedgerClient(config.rpc_url), owner, args.token_address)
    return report.ok


def run_claim(args, config: Config) -> bool:
    report = claim_fees(args.token_address, config)
    if report.failed:
        print(f"\n{C.RED}{len(report.failed)} claim(s) failed:{C.END}")
        for c in report.failed:
            info(f"{c.asset.label}: {c.error}")
    elif report.claimed:
        print(f"\n{C.GREEN}Claimed {len(report.claimed)} asset(s).{C.END}")
    return report.ok


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        config = Config.from_env()
        setup_logging(config.logs_dir)
        if args.command == "check":
            ok = run_check(args, config)
        else:
            ok = run_claim(args, config)
    except CrykeError as e:
        print(f"\n{C.RED}❌ Error: {e}{C.END}", file=sys.stderr)
        sys.exit(1)

    if not ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
