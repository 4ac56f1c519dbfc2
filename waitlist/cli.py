import argparse
import logging
import os
import sys
import tempfile
from typing import List, Optional

import uvicorn
from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError

from waitlist.core.config import Settings, get_settings
from waitlist.core.exceptions import StorageError
from waitlist.main import create_app
from waitlist.services.listing_service import list_entries
from waitlist.utils.audit import configure_audit_logger

logger = logging.getLogger(__name__)

PROG = "waitlist"

USAGE = """{prog} serve [-f path]
       {prog} list [-f path] [--honeypot]
       {prog} demo [-dir path]"""

DB_PATH_HELP = "path to SQLite database file (defaults to waitlist.db or $DATABASE_PATH)"


def build_parser(prog: str = PROG) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        usage=USAGE.format(prog=prog),
        description="Waitlist signup service backed by SQLite.",
    )
    commands = parser.add_subparsers(dest="command", title="commands", metavar="command")

    serve = commands.add_parser("serve", help="Start the waitlist HTTP API server.")
    serve.add_argument("-f", dest="db_path", default="", metavar="path", help=DB_PATH_HELP)

    list_cmd = commands.add_parser("list", help="Print waitlist entries (use --honeypot for trap submissions).")
    list_cmd.add_argument("-f", dest="db_path", default="", metavar="path", help=DB_PATH_HELP)
    list_cmd.add_argument("--honeypot", action="store_true", help="list only honeypot trap submissions")

    demo = commands.add_parser("demo", help="Launch the demo server with a fresh SQLite database.")
    demo.add_argument(
        "-dir", "--dir", dest="dir", default=".", metavar="path",
        help="directory where the demo SQLite database will be created",
    )
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format="%(message)s")
    configure_audit_logger()


def resolve_database_path(override: str, app_settings: Settings) -> str:
    return override or app_settings.DATABASE_PATH


def create_demo_database(directory: str) -> str:
    """Create an empty, uniquely named database file and return its path."""
    directory = directory or "."
    os.makedirs(directory, exist_ok=True)
    fd, path = tempfile.mkstemp(prefix="waitlist-demo-", suffix=".db", dir=directory)
    os.close(fd)
    return path


def run_api_server(db_path_override: str, app_settings: Settings) -> int:
    db_path = resolve_database_path(db_path_override, app_settings)
    try:
        app = create_app(db_path, app_settings)
    except (ConnectionError, SQLAlchemyError) as e:
        logger.error("database setup failed: %s", e)
        return 1

    logger.info("waitlist API listening on %s:%s (database %s)", app_settings.HOST, app_settings.PORT, db_path)
    uvicorn.run(app, host=app_settings.HOST, port=app_settings.PORT, log_level=app_settings.LOG_LEVEL.lower())
    return 0


def run_list(db_path_override: str, honeypot: bool, app_settings: Settings) -> int:
    db_path = resolve_database_path(db_path_override, app_settings)
    try:
        list_entries(db_path, sys.stdout, honeypot=honeypot)
    except StorageError as e:
        logger.error("list failed: %s: %s", e.message, e.details)
        return 1
    except (FileNotFoundError, ConnectionError, SQLAlchemyError) as e:
        logger.error("list failed: %s", e)
        return 1
    return 0


def run_demo(directory: str, app_settings: Settings) -> int:
    try:
        db_path = create_demo_database(directory)
    except OSError as e:
        logger.error("demo setup failed: %s", e)
        return 1
    logger.info("demo database created at %s", db_path)
    return run_api_server(db_path, app_settings)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_usage(sys.stderr)
        return 1

    app_settings = get_settings()
    configure_logging(app_settings.LOG_LEVEL)

    if args.command == "serve":
        return run_api_server(args.db_path, app_settings)
    if args.command == "list":
        return run_list(args.db_path, args.honeypot, app_settings)
    return run_demo(args.dir, app_settings)
