"""Re-embed work logs changed since the last recorded update.

Usage:
    python scripts/update_embeddings.py [--state-file PATH]
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from worklog_chat.bootstrap import build_components
from worklog_chat.cli.reporting import print_report
from worklog_chat.config.settings import Settings
from worklog_chat.exceptions import WorklogChatError
from worklog_chat.observability.logger import setup_logging


def read_last_update(path: Path) -> datetime | None:
    try:
        return datetime.fromisoformat(path.read_text(encoding="utf-8").strip())
    except (OSError, ValueError):
        return None


def write_last_update(path: Path, instant: datetime) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(instant.isoformat(), encoding="utf-8")
    except OSError as e:
        print(f"Warning: could not record update time: {e}")


async def main(state_file: str | None) -> int:
    settings = Settings()
    setup_logging(settings.log_level, json_output=False)
    state_path = Path(state_file or settings.last_update_file)
    try:
        components = await build_components(settings)
    except WorklogChatError as e:
        print(f"Error: {e}")
        return 1

    print("Checking for updates...\n")
    started = datetime.now()
    report = await components.embedding_pipeline.update_embeddings(read_last_update(state_path))
    print_report(report)
    if report.success and report.files_processed > 0:
        write_last_update(state_path, started)
    return 0 if report.success else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Incrementally update work-log embeddings")
    parser.add_argument("--state-file", default=None)
    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.state_file)))
