"""Read model — filtered views and per-category statistics.

Pure functions over an already-loaded record sequence. Input order
(newest first, fixed at load time) is preserved.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from skillshare.models import ALL_CATEGORIES, CategoryStat, SkillCategory, SkillRecord


def matches_search(record: SkillRecord, search_term: str) -> bool:
    term = search_term.lower()
    return term in record.category.value.lower() or term in record.owner.lower()


def matches_category(record: SkillRecord, filter_category: str) -> bool:
    return filter_category == ALL_CATEGORIES or record.category.value == filter_category


def filter_records(
    records: Iterable[SkillRecord],
    search_term: str = "",
    filter_category: str = ALL_CATEGORIES,
) -> list[SkillRecord]:
    """Records matching both the search term and the category filter."""
    return [
        r
        for r in records
        if matches_search(r, search_term) and matches_category(r, filter_category)
    ]


def category_stats(records: Sequence[SkillRecord]) -> list[CategoryStat]:
    """Count and percentage of total for every category."""
    total = len(records) or 1
    stats = []
    for category in SkillCategory:
        count = sum(1 for r in records if r.category is category)
        stats.append(CategoryStat(category=category, count=count, percentage=count / total * 100))
    return stats
