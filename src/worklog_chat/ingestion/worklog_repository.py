"""File-system repository of dated Markdown work logs."""

from __future__ import annotations

import base64
import re
from datetime import datetime
from pathlib import Path

from worklog_chat.exceptions import InvalidDocumentError
from worklog_chat.models.domain import WorkLog, extract_iso_date
from worklog_chat.observability.logger import get_logger
from worklog_chat.query.date_range import DateRange

logger = get_logger("worklog_repository")

FRONT_MATTER_PATTERN = re.compile(r"^---\s*\n.*?\n---\s*\n", re.DOTALL)
TITLE_PATTERN = re.compile(r"^#\s+(.+)$", re.MULTILINE)
WORKLOG_SUFFIXES = (".md", ".markdown")


class WorklogRepository:
    """Loads ``*.md`` files under ``data_dir``; the date comes from the file path."""

    def __init__(self, data_dir: str | Path) -> None:
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def get_all(self) -> list[WorkLog]:
        return self._load(self._markdown_files())

    def get_by_date_range(self, date_range: DateRange) -> list[WorkLog]:
        return [log for log in self.get_all() if log.is_within_range(date_range)]

    def get_modified_after(self, instant: datetime) -> list[WorkLog]:
        threshold = instant.timestamp()
        modified = [f for f in self._markdown_files() if f.stat().st_mtime > threshold]
        return self._load(modified)

    def exists(self) -> bool:
        return bool(self._markdown_files())

    def _markdown_files(self) -> list[Path]:
        if not self._data_dir.is_dir():
            return []
        return sorted(
            p for p in self._data_dir.rglob("*") if p.is_file() and p.suffix.lower() in WORKLOG_SUFFIXES
        )

    def _load(self, files: list[Path]) -> list[WorkLog]:
        logs = []
        for file_path in files:
            log = self._read(file_path)
            if log is not None:
                logs.append(log)
        return logs

    def _read(self, file_path: Path) -> WorkLog | None:
        relative = file_path.relative_to(self._data_dir).as_posix()
        date = extract_iso_date(relative)
        if date is None:
            logger.warning("worklog_without_date", path=relative)
            return None

        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("worklog_read_failed", path=relative, error=str(e))
            return None

        text = FRONT_MATTER_PATTERN.sub("", text, count=1)
        metadata: dict = {}
        title_match = TITLE_PATTERN.search(text)
        if title_match:
            metadata["title"] = title_match.group(1).strip()

        try:
            return WorkLog(
                log_id=base64.urlsafe_b64encode(relative.encode()).decode(),
                date=date,
                content=text,
                file_path=relative,
                metadata=metadata,
            )
        except InvalidDocumentError:
            logger.warning("worklog_empty", path=relative)
            return None
