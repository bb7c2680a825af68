#!/usr/bin/env python3
"""
Email a random verse.

Picks one verse at random and sends it as an HTML message over SMTP-SSL.
Credentials and addresses come from the environment (or .env):

    SMTP_USERNAME, SMTP_PASSWORD   required
    DAILY_VERSE_FROM               defaults to SMTP_USERNAME
    DAILY_VERSE_TO                 defaults to DAILY_VERSE_FROM
    SMTP_HOST, SMTP_PORT           default smtp.gmail.com:465

Usage (from the api directory, e.g. from cron):
    python -m scripts.send_daily_verse
"""

import logging
import os
import smtplib
import sys
from datetime import datetime
from email.message import EmailMessage

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core import config
from services.scripture import CorpusError, ScriptureService, VerseWithReference

logger = logging.getLogger(__name__)


class MissingCredentialsError(RuntimeError):
    """SMTP username or password is not configured."""


def subject_for(now: datetime) -> str:
    return f"Random verse for {now:%A, %B} {now.day}"


def build_message(
    verse: VerseWithReference,
    sender: str,
    recipient: str,
    now: datetime = None,
) -> EmailMessage:
    """Build an HTML email carrying one verse."""
    now = now or datetime.now()

    msg = EmailMessage()
    msg["From"] = sender
    msg["To"] = recipient
    msg["Subject"] = subject_for(now)
    msg.set_content(str(verse))
    msg.add_alternative(verse.to_html_string(), subtype="html")
    return msg


def send_message(
    msg: EmailMessage,
    username: str = None,
    password: str = None,
    host: str = None,
    port: int = None,
    smtp_factory=smtplib.SMTP_SSL,
) -> None:
    """
    Send `msg` through an authenticated SMTP-SSL relay.

    Raises:
        MissingCredentialsError: If username or password is missing
        smtplib.SMTPException / OSError: If the relay rejects or is unreachable
    """
    username = username or config.SMTP_USERNAME
    password = password or config.SMTP_PASSWORD
    if not username or not password:
        raise MissingCredentialsError(
            "Could not read SMTP_USERNAME or SMTP_PASSWORD environment variables"
        )

    host = host or config.SMTP_HOST
    port = port or config.SMTP_PORT

    logger.info(f"Connecting to {host}:{port}")
    with smtp_factory(host, port) as smtp:
        smtp.login(username, password)
        smtp.send_message(msg)


def main(service: ScriptureService = None, smtp_factory=smtplib.SMTP_SSL) -> int:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATEFMT,
    )

    service = service or ScriptureService()

    sender = config.DAILY_VERSE_FROM or config.SMTP_USERNAME
    recipient = config.DAILY_VERSE_TO or sender
    if not sender or not recipient:
        logger.error("No sender or recipient configured (DAILY_VERSE_FROM / DAILY_VERSE_TO)")
        return 1

    try:
        verse = service.random_verse()
    except CorpusError as e:
        logger.error(f"Failed to load corpus: {e}")
        return 1

    msg = build_message(verse, sender, recipient)

    try:
        send_message(msg, smtp_factory=smtp_factory)
    except MissingCredentialsError as e:
        logger.error(str(e))
        return 1
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Could not send email: {e}")
        return 1

    logger.info(f"Email sent successfully: {verse.reference_string}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
