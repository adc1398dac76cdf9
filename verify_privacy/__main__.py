"""
Command-line harness for trying the SDK against a tenant.

Reads ``TENANT_URL``, ``ACCESS_TOKEN`` and the optional subject context from
the environment (or ``.env``) and prints the resulting envelope as JSON.

Usage::

    python -m verify_privacy assess marketing/email.default
    python -m verify_privacy metadata marketing/11 terms
    python -m verify_privacy consents
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from verify_privacy.core.config import ConfigurationError, Settings
from verify_privacy.core.logging_config import configure_logging
from verify_privacy.privacy import Privacy
from verify_privacy.schemas.assessment import RequestItem
from verify_privacy.schemas.envelope import Envelope

logger = logging.getLogger(__name__)


def parse_item(value: str) -> RequestItem:
    """Parse ``purpose[/attribute][.accessType]`` into a ``RequestItem``."""
    purpose_part, _, access_type = value.partition(".")
    purpose_id, _, attribute_id = purpose_part.partition("/")
    return RequestItem(
        purpose_id=purpose_id,
        attribute_id=attribute_id or None,
        access_type_id=access_type or None,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="verify_privacy")
    sub = parser.add_subparsers(dest="command", required=True)

    assess = sub.add_parser("assess", help="Request data usage approval")
    assess.add_argument("items", nargs="+", metavar="PURPOSE[/ATTRIBUTE][.ACCESS_TYPE]")

    metadata = sub.add_parser("metadata", help="Fetch consent page metadata")
    metadata.add_argument("items", nargs="+", metavar="PURPOSE[/ATTRIBUTE][.ACCESS_TYPE]")

    consents = sub.add_parser("consents", help="List the subject's consents")
    consents.add_argument("--application-id", default=None)
    return parser


async def run(args: argparse.Namespace, client: Privacy) -> Envelope:
    if args.command == "assess":
        return await client.assess([parse_item(value) for value in args.items])
    if args.command == "metadata":
        return await client.get_consent_metadata([parse_item(value) for value in args.items])
    return await client.get_user_consents(application_id=args.application_id)


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = Settings()
    configure_logging(settings.log_level)

    try:
        client = Privacy(settings.client_config(), settings.auth(), settings.context())
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return 2

    envelope = asyncio.run(run(args, client))
    print(json.dumps(envelope.to_dict(), indent=2))  # noqa: T201
    return 0 if envelope.ok else 1


if __name__ == "__main__":
    sys.exit(main())
