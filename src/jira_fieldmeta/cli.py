from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Sequence

from colorama import Fore, Style, just_fix_windows_console

from .config import Credentials, load_credentials, prompt_credentials
from .errors import FieldMetaError
from .extract import parse_createmeta
from .jira import JiraClient
from .logging_utils import setup_logging
from .render import write_fields, write_to_path
from .selector import build_query, select_fields


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="List Jira custom fields and their allowed values")
    parser.add_argument("-c", dest="creds", default="", help="Path to credentials JSON/YAML file (optional)")
    parser.add_argument("-f", dest="output", default="", help="Path to output file (optional)")
    parser.add_argument("-n", dest="name", default="", help="A field name to search for (optional)")
    parser.add_argument("-i", dest="field_id", default="", help="A customfield ID or number to search for (optional)")
    parser.add_argument("--timeout", type=int, default=30, help="HTTP timeout in seconds")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for stderr diagnostics",
    )
    return parser


def run(
    args: argparse.Namespace,
    client_factory: Callable[[Credentials, int], JiraClient] | None = None,
) -> None:
    query = build_query(args.name, args.field_id)
    credentials = load_credentials(args.creds) if args.creds else prompt_credentials()

    client = (client_factory or JiraClient)(credentials, args.timeout)
    try:
        raw = client.fetch_createmeta()
    finally:
        client.close()

    fields = select_fields(parse_createmeta(raw), query)
    if args.output:
        write_to_path(fields, args.output)
    else:
        write_fields(fields, sys.stdout, highlight=True)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    just_fix_windows_console()
    logger = logging.getLogger(__name__)
    try:
        run(args)
    except FieldMetaError as exc:
        logger.debug("run failed", extra={"extra": {"error": str(exc), "kind": type(exc).__name__}})
        sys.stderr.write(f"{Fore.RED}error: {exc}{Style.RESET_ALL}\n")
        return exc.exit_code
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
