from __future__ import annotations

import argparse
import os
import sys
from typing import Sequence

from ..catalog import CatalogManager
from ..clients import ClientManager
from ..config import ShopConfig, build_config
from ..errors import ShopError
from ..exports import export_clients, export_orders, export_products
from ..logging import get_logger, set_level
from ..orders import OrderWorkflow, ReceiptRenderer, SmtpMailer
from ..prompts import Console
from ..store import ShopDatabase
from .shell import InteractiveShell

LOG = get_logger("cli-main")

EXPORTERS = {
    "products": export_products,
    "clients": export_clients,
    "orders": export_orders,
}


def _add_config_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--db-path", help="SQLite database file (defaults to SHOP_DB_PATH or var/shopdb/shop.sqlite3)")
    p.add_argument("--output-dir", help="Directory for CSV exports and order.pdf (defaults to the working directory)")
    p.add_argument("--smtp-host", help="SMTP relay host (overrides env/.env)")
    p.add_argument("--smtp-port", type=int, help="SMTP relay port (overrides env/.env)")
    p.add_argument("--smtp-user", help="SMTP login user (overrides env/.env)")
    p.add_argument("--smtp-password", help="SMTP login password (overrides env/.env)")
    p.add_argument("--smtp-sender", help="From address of confirmation emails")
    p.add_argument("--no-email", action="store_true", help="Skip sending order confirmation emails")
    p.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)")


def open_database(config: ShopConfig) -> ShopDatabase:
    """Connect and ensure schema; any failure here ends the process."""
    try:
        return ShopDatabase(config.db_path)
    except ShopError as exc:
        LOG.error(f"Cannot open shop database: {exc}")
        raise SystemExit(1)


def build_shell(config: ShopConfig, db: ShopDatabase, console: Console) -> InteractiveShell:
    mailer = SmtpMailer.from_config(config) if config.email_enabled else None
    return InteractiveShell(
        console,
        CatalogManager(db, console, config.output_dir),
        ClientManager(db, console, config.output_dir),
        OrderWorkflow(
            db,
            console,
            config.output_dir,
            renderer=ReceiptRenderer(config.output_dir),
            mailer=mailer,
        ),
    )


def _handle_shell(args: argparse.Namespace) -> int:
    config = build_config(args, script_dir=os.getcwd())
    db = open_database(config)
    console = Console()
    try:
        return build_shell(config, db, console).run()
    except KeyboardInterrupt:
        console.echo("")
        console.echo("Exiting program.")
        return 0


def _handle_init(args: argparse.Namespace) -> int:
    config = build_config(args, script_dir=os.getcwd())
    db = open_database(config)
    LOG.info(f"Shop DB ready at: {db.db_path}")
    print(db.db_path)
    return 0


def _handle_export(args: argparse.Namespace) -> int:
    config = build_config(args, script_dir=os.getcwd())
    db = open_database(config)
    try:
        path = EXPORTERS[args.table](db, config.output_dir)
    except ShopError as exc:
        LOG.error(f"Export failed: {exc}")
        return 1
    print(path)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    provided = list(argv) if argv is not None else sys.argv[1:]

    parser = argparse.ArgumentParser(
        prog="shop-manager",
        description="Interactive product, client and order management for a single shop.",
    )
    _add_config_args(parser)
    subparsers = parser.add_subparsers(dest="command")
    parser.set_defaults(handler=_handle_shell, command="shell")

    shell = subparsers.add_parser("shell", help="Start the interactive menu (default).")
    shell.set_defaults(handler=_handle_shell)

    init = subparsers.add_parser("init", help="Create/ensure the shop DB schema exists and print its path")
    init.set_defaults(handler=_handle_init)

    export = subparsers.add_parser("export", help="Write one table to CSV without entering the menu")
    export.add_argument("table", choices=sorted(EXPORTERS))
    export.set_defaults(handler=_handle_export)

    args = parser.parse_args(provided)
    if args.log_level:
        os.environ["LOG_LEVEL"] = args.log_level
        set_level(args.log_level)
    LOG.info(f"Shop CLI invoked with arguments: {provided}")

    code = args.handler(args)
    LOG.info(f"Command '{args.command}' finished with exit code {code}.")
    return code


if __name__ == "__main__":
    sys.exit(main())
