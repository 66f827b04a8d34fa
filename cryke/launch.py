#!/usr/bin/env python3
"""
Cryke Token Launcher - launch a token via the Cryke API with automatic wallet creation
Usage: cryke-launch --name "Token Name" --symbol TKN --description "..."

No wallet? Creates one. No social accounts? No problem. Just launches.
"""
import argparse
import sys

from cryke.colors import C
from cryke.config import Config
from cryke.errors import CrykeError
from cryke.logs import setup_logging
from cryke.orchestrator import LaunchRequest, launch

EPILOG = """
Environment (optional, for social announcements):
  MOLTX_API_KEY     - Announce on MoltX
  MOLTBOOK_API_KEY  - Announce on Moltbook
  FOURCLAW_API_KEY  - Announce on 4claw

The launcher will:
  1. Create a wallet if you don't have one
  2. Launch your token directly via the Cryke API
  3. Announce on any social platforms you have credentials for
  4. You earn 80% of all trading fees forever
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cryke-launch",
        description="Cryke Token Launcher - zero-friction token deployment",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    required = parser.add_argument_group("required")
    required.add_argument("--name", required=True, help="Token name (1-32 chars)")
    required.add_argument("--symbol", required=True, help="Token symbol (1-8 chars)")
    required.add_argument("--description", required=True, help="Token description")
    parser.add_argument("--wallet", help="Your wallet address (auto-created if not provided)")
    parser.add_argument("--image", help="Direct image URL")
    parser.add_argument("--website", help="Project website")
    parser.add_argument("--twitter", help="Twitter handle")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        config = Config.from_env()
        setup_logging(config.logs_dir)
        request = LaunchRequest(
            name=args.name,
            symbol=args.symbol,
            description=args.description,
            wallet=args.wallet,
            image=args.image,
            website=args.website,
            twitter=args.twitter,
        )
        launch(request, config)
    except CrykeError as e:
        print(f"\n{C.RED}❌ LAUNCH FAILED: {e}{C.END}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
