"""Entry point that reports how the configured policy treats one attachment."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from dotenv import load_dotenv

# Ensure project root is on sys.path when running as a script
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from attachment_policy.config import Settings
from attachment_policy.models import AttachmentRecord
from attachment_policy.platform import NetworkClass, PlatformSnapshot
from attachment_policy.policy import AttachmentPolicy

load_dotenv()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Check whether an attachment may be viewed or saved.")
    parser.add_argument("--name", required=True, help="Attachment filename")
    parser.add_argument("--content-type", default="", help="Declared MIME type (inferred when empty)")
    parser.add_argument("--size", type=parse_size, default=0, help="Attachment size in bytes")
    parser.add_argument("--id", dest="attachment_id", default="1", help="Attachment identifier")
    parser.add_argument("--account-id", default="0", help="Account used to build the view request")
    parser.add_argument(
        "--network",
        choices=[network.value for network in NetworkClass],
        default=NetworkClass.UNMETERED.value,
        help="Active network class",
    )
    parser.add_argument("--viewers", type=int, default=1, help="Number of apps able to view the attachment")
    parser.add_argument("--sideload", action="store_true", help="Treat sideload installs as allowed")
    return parser


def parse_size(value: str) -> int:
    try:
        size = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid size: {value}") from exc
    if size < 0:
        raise argparse.ArgumentTypeError(f"Size must not be negative: {value}")
    return size


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = Settings()
    configure_logging(settings.log_level)

    policy = AttachmentPolicy.from_settings(settings)
    platform = PlatformSnapshot(
        network=NetworkClass(args.network),
        view_handlers=args.viewers,
        sideload_allowed=args.sideload,
    )
    attachment = AttachmentRecord(
        attachment_id=args.attachment_id,
        name=args.name,
        content_type=args.content_type,
        size=args.size,
    )

    result = policy.evaluate(attachment, platform)
    request = policy.view_request(attachment, platform, account_id=args.account_id)

    logging.info(
        "'%s' (%s, %s bytes): view=%s save=%s download=%s",
        result.name,
        result.content_type,
        result.size,
        result.allow_view,
        result.allow_save,
        result.eligible_for_download,
    )
    logging.info("View request: action=%s data=%s flags=%s", request.action, request.data, request.flags)
    return 0 if result.eligible_for_download else 1


if __name__ == "__main__":
    sys.exit(main())
