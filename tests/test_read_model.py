"""Tests for filtering and category statistics."""

from skillshare.models import SkillCategory, SkillRecord
from skillshare.read_model import category_stats, filter_records

AAA = "0xAAA1111111111111111111111111111111111111"
BBB = "0xBBB2222222222222222222222222222222222222"


def _record(record_id: str, category: SkillCategory, owner: str = AAA, timestamp: int = 100) -> SkillRecord:
    return SkillRecord(
        id=record_id,
        payload="FHE-e30=",
        timestamp=timestamp,
        owner=owner,
        category=category,
    )


RECORDS = (
    _record("p1", SkillCategory.PROGRAMMING, AAA, 400),
    _record("c1", SkillCategory.COOKING, BBB, 300),
    _record("p2", SkillCategory.PROGRAMMING, BBB, 200),
    _record("c2", SkillCategory.COOKING, AAA, 100),
)


def test_search_is_case_insensitive_on_category():
    for term in ["cook", "COOK", "Cook"]:
        result = filter_records(RECORDS, term)
        assert [r.id for r in result] == ["c1", "c2"]


def test_search_matches_owner():
    result = filter_records(RECORDS, "0xbbb")
    assert [r.id for r in result] == ["c1", "p2"]


def test_filter_by_category():
    result = filter_records(RECORDS, "", "Programming")
    assert [r.id for r in result] == ["p1", "p2"]


def test_filter_all_with_empty_search_returns_everything():
    assert filter_records(RECORDS) == list(RECORDS)


def test_search_and_filter_combine():
    result = filter_records(RECORDS, "0xaaa", "Cooking")
    assert [r.id for r in result] == ["c2"]


def test_no_match():
    assert filter_records(RECORDS, "juggling") == []


def test_stats_even_split():
    records = [
        _record("a", SkillCategory.PROGRAMMING),
        _record("b", SkillCategory.COOKING),
        _record("c", SkillCategory.LANGUAGE),
        _record("d", SkillCategory.OTHER),
    ]
    stats = category_stats(records)
    assert [s.category for s in stats] == list(SkillCategory)
    assert all(s.count == 1 for s in stats)
    assert all(s.percentage == 25.0 for s in stats)


def test_stats_empty_set():
    stats = category_stats([])
    assert len(stats) == 4
    assert all(s.count == 0 and s.percentage == 0.0 for s in stats)


def test_stats_uneven():
    stats = {s.category: s for s in category_stats(RECORDS)}
    assert stats[SkillCategory.PROGRAMMING].percentage == 50.0
    assert stats[SkillCategory.LANGUAGE].count == 0
