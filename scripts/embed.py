"""Embed every work log under the data directory into the similarity index.

Usage:
    python scripts/embed.py [--force] [--batch-size N]
    python scripts/embed.py --status
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from worklog_chat.bootstrap import build_components
from worklog_chat.cli.reporting import print_report, print_status
from worklog_chat.config.settings import Settings
from worklog_chat.exceptions import WorklogChatError
from worklog_chat.observability.logger import setup_logging


async def main(args: argparse.Namespace) -> int:
    settings = Settings()
    setup_logging(settings.log_level, json_output=False)
    try:
        components = await build_components(settings)
    except WorklogChatError as e:
        print(f"Error: {e}")
        return 1

    pipeline = components.embedding_pipeline
    if args.status:
        status = await pipeline.status()
        print_status(status)
        if status.is_available and not status.collection_exists:
            print("\nTo create embeddings run: python scripts/embed.py")
        return 0

    print("Starting embedding process...\n")
    report = await pipeline.create_embeddings(
        force_rebuild=args.force, batch_size=args.batch_size
    )
    print_report(report)
    return 0 if report.success else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Build the work-log similarity index")
    parser.add_argument("-f", "--force", action="store_true", help="Rebuild an existing index")
    parser.add_argument("--batch-size", type=int, default=None)
    parser.add_argument("--status", action="store_true", help="Show index status and exit")
    sys.exit(asyncio.run(main(parser.parse_args())))
