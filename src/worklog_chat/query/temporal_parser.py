"""Map free-text questions to date windows by recognizing temporal phrases."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from worklog_chat.observability.logger import get_logger
from worklog_chat.query.date_range import MONTH_NAMES, DateRange

logger = get_logger("temporal_parser")

_MONTH_ALTERNATION = "|".join(MONTH_NAMES)
MONTH_THIRD_PATTERN = re.compile(rf"\b(early|mid|late)\s+({_MONTH_ALTERNATION})\b")
FULL_MONTH_PATTERN = re.compile(rf"\b(?:in\s+)?({_MONTH_ALTERNATION})\b")

RECENCY_PHRASES = ("recently", "lately", "last few days", "recent days", "recent weeks")
# "recent" alone only counts next to one of these, so "recent projects" stays topical
RECENCY_ACTION_WORDS = ("what", "show", "tell", "summary", "update")


def _contains_any(*phrases: str) -> Callable[[str], bool]:
    def match(query: str) -> bool:
        return any(p in query for p in phrases)

    return match


def _is_recency_query(query: str) -> bool:
    if any(p in query for p in RECENCY_PHRASES):
        return True
    return "recent" in query and any(w in query for w in RECENCY_ACTION_WORDS)


def _regex(pattern: re.Pattern[str]) -> Callable[[str], re.Match[str] | None]:
    return pattern.search


@dataclass(frozen=True)
class TemporalRule:
    """A guard over the lower-cased query plus the range it produces.

    ``match`` returns something truthy on a hit; ``build`` receives that value
    (a regex match for the month rules) and the reference instant.
    """

    name: str
    match: Callable[[str], object]
    build: Callable[[object, datetime], DateRange]


# Evaluated in order; the first rule that matches wins.
TEMPORAL_RULES: tuple[TemporalRule, ...] = (
    TemporalRule(
        "last_week",
        _contains_any("last week", "past week"),
        lambda _, now: DateRange.last_period(now, "week"),
    ),
    TemporalRule(
        "this_week",
        _contains_any("this week"),
        lambda _, now: DateRange.this_period(now, "week"),
    ),
    TemporalRule(
        "last_month",
        _contains_any("last month", "past month"),
        lambda _, now: DateRange.last_period(now, "month"),
    ),
    TemporalRule("today", _contains_any("today"), lambda _, now: DateRange.today(now)),
    TemporalRule("yesterday", _contains_any("yesterday"), lambda _, now: DateRange.yesterday(now)),
    TemporalRule("recent", _is_recency_query, lambda _, now: DateRange.recent(now)),
    TemporalRule(
        "month_third",
        _regex(MONTH_THIRD_PATTERN),
        lambda m, now: DateRange.month_third(now, m.group(1), m.group(2)),
    ),
    TemporalRule(
        "full_month",
        _regex(FULL_MONTH_PATTERN),
        lambda m, now: DateRange.full_month(now, m.group(1)),
    ),
)


class TemporalQueryParser:
    def __init__(self, rules: tuple[TemporalRule, ...] = TEMPORAL_RULES) -> None:
        self._rules = rules

    def parse(self, query: str, now: datetime) -> DateRange | None:
        """Return the date window a query asks about, or None for topical queries."""
        lowered = query.lower()
        for rule in self._rules:
            hit = rule.match(lowered)
            if hit:
                date_range = rule.build(hit, now)
                logger.debug(
                    "temporal_rule_matched",
                    rule=rule.name,
                    start=date_range.start.isoformat(),
                    end=date_range.end.isoformat(),
                )
                return date_range
        return None

    def match_rule(self, query: str) -> str | None:
        lowered = query.lower()
        for rule in self._rules:
            if rule.match(lowered):
                return rule.name
        return None

    def is_temporal_query(self, query: str, now: datetime) -> bool:
        return self.parse(query, now) is not None
