"""Command line entry point.

Run with: invoicing-import ACCOUNT EMAIL TOKEN
Or: python -m services.importer.cli ACCOUNT EMAIL TOKEN

Legacy database and API settings come from APP_* environment variables
(see services.shared.config).
"""

import argparse
import logging
import sys
from collections.abc import Sequence

from services.fakturoid.client import FakturoidClient
from services.importer.service import InvoicingImporter
from services.legacy.repository import LegacyDatabase
from services.shared.config import get_settings
from services.shared.logging_config import configure_logging

logger = logging.getLogger(__name__)

USAGE = "USAGE: invoicing-import accountname email token"


class _UsageParser(argparse.ArgumentParser):
    """Parser that prints the one-line usage and exits cleanly on bad arguments."""

    def error(self, message: str) -> None:  # type: ignore[override]
        print(USAGE)
        raise SystemExit(0)


def build_parser() -> argparse.ArgumentParser:
    parser = _UsageParser(
        prog="invoicing-import",
        description="Import legacy contacts and invoices into Fakturoid",
        add_help=False,
    )
    parser.add_argument("account", help="Fakturoid account name")
    parser.add_argument("email", help="Fakturoid user email")
    parser.add_argument("token", help="Fakturoid API token")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments and run the import.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        Process exit status
    """
    args = build_parser().parse_args(sys.argv[1:] if argv is None else argv)

    settings = get_settings()
    configure_logging(settings)

    legacy = LegacyDatabase(settings)
    with FakturoidClient(args.account, args.email, args.token, settings) as client:
        importer = InvoicingImporter(client, legacy, settings)
        try:
            importer.run()
        except Exception:
            logger.exception("Import aborted")
            raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
