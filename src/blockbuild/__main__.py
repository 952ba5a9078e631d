"""Command line entry point: ``python -m blockbuild --user alice``."""

import argparse

from blockbuild.conf import settings
from blockbuild.helpers import run_game


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and run the game."""
    parser = argparse.ArgumentParser(prog="blockbuild", description="Build with blocks, saved per user.")
    parser.add_argument("--user", help="id of the user document to load (default: settings.USER_ID)")
    parser.add_argument("--store", help="dotted path of the document store class (default: settings.DOCUMENT_STORE)")
    parser.add_argument("--store-root", help="directory of the JSON file store (default: settings.DOCUMENT_STORE_ROOT)")
    parser.add_argument("--log-level", default="INFO", help="logging level (default: INFO)")
    args = parser.parse_args(argv)

    if args.store:
        settings.DOCUMENT_STORE = args.store
    if args.store_root:
        settings.DOCUMENT_STORE_ROOT = args.store_root

    run_game(args.user, log_level=args.log_level)


if __name__ == "__main__":
    main()
