"""Utility script to dispatch a stored notification from the command line."""

from __future__ import annotations

import argparse
import logging

from sqlalchemy.exc import SQLAlchemyError

from app.application.formatters import Branding
from app.application.use_cases.delivery import ChannelTransports, dispatch_stored_notification
from app.config import get_settings
from app.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for a manual dispatch."""

    parser = argparse.ArgumentParser(
        description="Dispatch a stored notification over its enabled channels.",
    )
    parser.add_argument("notification_id", help="Identifier of the notification to dispatch")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log provider calls and skipped channels.",
    )
    return parser.parse_args()


def main() -> None:
    """Dispatch the notification named on the command line and print each attempt."""

    args = parse_args()
    settings = get_settings()
    logging.basicConfig(level=logging.DEBUG if args.verbose else settings.log_level.upper())

    initialize_database()

    session = SessionLocal()
    try:
        report = dispatch_stored_notification(
            session,
            args.notification_id,
            ChannelTransports.from_settings(settings),
            branding=Branding(app_name=settings.app_name, deep_link_scheme=settings.deep_link_scheme),
        )
    except ValueError as exc:
        raise SystemExit(f"Could not dispatch notification: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while dispatching notification: {exc}") from exc
    else:
        print(f"Notification {report.notification_id} dispatched:")
        for attempt in report.attempts:
            detail = f" ({attempt.error_message})" if attempt.error_message else ""
            print(
                f"  #{attempt.attempt_number} {attempt.channel.value}: "
                f"{attempt.status.value}{detail}"
            )
    finally:
        session.close()


if __name__ == "__main__":
    main()
