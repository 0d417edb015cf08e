# ABOUTME: CLI entry point for newsletter-desk.
# ABOUTME: Provides subcommands: serve, init-db, status, publish.

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import structlog

from newsletter_desk.config import get_settings


def configure_logging() -> None:
    """Configure structlog for console or JSON output."""
    settings = get_settings()

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    if settings.log_format == "json":
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.add_log_level,
                structlog.processors.dict_tracebacks,
                structlog.processors.JSONRenderer(),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
        )
    else:
        structlog.configure(
            processors=[
                structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
                structlog.processors.add_log_level,
                structlog.dev.ConsoleRenderer(colors=True),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
        )


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    settings = get_settings()
    host = args.host or settings.app_host
    port = args.port or settings.app_port

    log = structlog.get_logger()
    log.info("cmd_serve_start", host=host, port=port)

    uvicorn.run("newsletter_desk.web.app:app", host=host, port=port, log_level="info")
    return 0


def cmd_init_db(_args: argparse.Namespace) -> int:
    """Create database tables if they don't exist."""
    from newsletter_desk.db.session import close_db, init_db

    log = structlog.get_logger()

    async def run() -> None:
        try:
            await init_db()
        finally:
            await close_db()

    try:
        asyncio.run(run())
    except Exception:
        log.exception("cmd_init_db_failed")
        return 1

    log.info("cmd_init_db_complete")
    return 0


def cmd_status(_args: argparse.Namespace) -> int:
    """Show subscriber counts by status."""
    from newsletter_desk.db.repository import SubscriberRepository
    from newsletter_desk.db.session import close_db
    from newsletter_desk.exceptions import StoreError

    log = structlog.get_logger()

    async def run() -> dict[str, int]:
        try:
            return await SubscriberRepository().count_by_status()
        finally:
            await close_db()

    try:
        counts = asyncio.run(run())
    except StoreError:
        log.exception("cmd_status_failed")
        return 1

    print("\n=== Newsletter Desk Subscribers ===\n")
    for status, count in counts.items():
        print(f"  {status}: {count}")
    print(f"\nTotal: {sum(counts.values())}\n")
    return 0


def cmd_publish(args: argparse.Namespace) -> int:
    """Send a newsletter issue to all confirmed subscribers."""
    from newsletter_desk.db.repository import SubscriberRepository
    from newsletter_desk.db.session import close_db
    from newsletter_desk.email.sender import build_email_client
    from newsletter_desk.exceptions import StoreError
    from newsletter_desk.models import DeliveryReport, NewsletterContent, NewsletterIssue
    from newsletter_desk.services.newsletter_service import NewsletterService

    log = structlog.get_logger()

    issue = NewsletterIssue(
        title=args.title,
        content=NewsletterContent(
            html=Path(args.html_file).read_text(encoding="utf-8"),
            text=Path(args.text_file).read_text(encoding="utf-8"),
        ),
    )
    service = NewsletterService(SubscriberRepository(), build_email_client())

    async def run() -> DeliveryReport:
        try:
            return await service.publish(issue)
        finally:
            await close_db()

    try:
        report = asyncio.run(run())
    except StoreError:
        log.exception("cmd_publish_failed")
        return 1

    log.info("cmd_publish_complete", delivered=report.delivered, failed=len(report.failed))
    return 1 if report.failed else 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="newsletter_desk",
        description="Newsletter Desk - subscriber management with double opt-in",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", type=str, help="Bind address. Defaults to app_host.")
    serve_parser.add_argument("--port", type=int, help="Bind port. Defaults to app_port.")

    # init-db command
    subparsers.add_parser("init-db", help="Create database tables")

    # status command
    subparsers.add_parser("status", help="Show subscriber counts by status")

    # publish command
    publish_parser = subparsers.add_parser(
        "publish",
        help="Send a newsletter issue to confirmed subscribers",
    )
    publish_parser.add_argument("--title", type=str, required=True, help="Issue title (subject)")
    publish_parser.add_argument(
        "--html-file", type=str, required=True, help="Path to the HTML body"
    )
    publish_parser.add_argument(
        "--text-file", type=str, required=True, help="Path to the plain-text body"
    )

    return parser


def main() -> int:
    """Main entry point."""
    configure_logging()

    parser = create_parser()
    args = parser.parse_args()

    commands = {
        "serve": cmd_serve,
        "init-db": cmd_init_db,
        "status": cmd_status,
        "publish": cmd_publish,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
