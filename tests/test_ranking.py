# tests/test_ranking.py
from datetime import datetime, timedelta, timezone

import pytest

from conftest import make_insight
from finquest_insights.expiration import active_insights, is_expired, is_expiring_soon
from finquest_insights.models.insights import InsightCategory, InsightType
from finquest_insights.ranking import (
    FilterSpec, SortOption, apply_view, filter_counts, filter_insights, paginate, select_top, sort_insights
)

NOW = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)
WINDOW = timedelta(hours=24)


def ids(insights):
    return [i.id for i in insights]


class TestSorting:

    def test_priority_descending(self):
        insights = [make_insight("a", 3), make_insight("b", 9), make_insight("c", 6)]
        assert ids(sort_insights(insights)) == ["b", "c", "a"]

    def test_priority_ties_prefer_newer(self):
        older = make_insight("a", 5, created_at=NOW - timedelta(hours=1))
        newer = make_insight("b", 5, created_at=NOW)
        assert ids(sort_insights([older, newer])) == ["b", "a"]

    def test_full_ties_fall_back_to_id(self):
        insights = [make_insight("c"), make_insight("a"), make_insight("b")]
        assert ids(sort_insights(insights)) == ["a", "b", "c"]

    def test_id_ties_use_numeric_sequence(self):
        insights = [make_insight(f"insight-{n}-1740819600000") for n in (10, 2, 1)]
        assert ids(sort_insights(insights)) == [
            "insight-1-1740819600000", "insight-2-1740819600000", "insight-10-1740819600000"
        ]

    def test_date_sort_newest_first(self):
        insights = [
            make_insight("old", 9, created_at=NOW - timedelta(days=2)),
            make_insight("new", 1, created_at=NOW),
        ]
        assert ids(sort_insights(insights, SortOption.DATE)) == ["new", "old"]

    def test_impact_sort_uses_priority_as_tie_break(self):
        insights = [
            make_insight("low", 9, impact="low"),
            make_insight("high-5", 5, impact="high"),
            make_insight("high-8", 8, impact="high"),
            make_insight("critical", 1, impact="critical"),
        ]
        assert ids(sort_insights(insights, SortOption.IMPACT)) == ["critical", "high-8", "high-5", "low"]

    def test_confidence_sort(self):
        insights = [make_insight("m", 5, confidence="medium"), make_insight("h", 2, confidence="high")]
        assert ids(sort_insights(insights, SortOption.CONFIDENCE)) == ["h", "m"]

    def test_category_sort_is_alphabetical(self):
        insights = [
            make_insight("s", category="saving"),
            make_insight("b", category="budgeting"),
            make_insight("g", category="goals"),
        ]
        assert ids(sort_insights(insights, SortOption.CATEGORY)) == ["b", "g", "s"]

    @pytest.mark.parametrize("option", list(SortOption))
    def test_sorting_is_idempotent(self, option):
        insights = [
            make_insight(str(n), priority=n % 10 + 1, impact=("low", "high")[n % 2],
                         created_at=NOW - timedelta(minutes=n % 3))
            for n in range(12)
        ]
        once = sort_insights(insights, option)
        assert ids(sort_insights(once, option)) == ids(once)

    def test_sort_accepts_option_value(self):
        insights = [make_insight("a", 3), make_insight("b", 9)]
        assert ids(sort_insights(insights, "priority")) == ["b", "a"]


class TestSelectTop:

    def test_keeps_highest_priorities(self):
        insights = [make_insight(str(p), p) for p in (2, 9, 4, 7, 5)]
        assert [i.priority for i in select_top(insights, 3)] == [9, 7, 5]

    def test_limit_larger_than_input(self):
        insights = [make_insight("a", 2)]
        assert ids(select_top(insights, 20)) == ["a"]

    def test_negative_limit(self):
        assert select_top([make_insight("a")], -1) == []


class TestExpiration:

    def test_expired_insight_is_not_active(self):
        expired = make_insight("x", type="cultural", created_at=NOW - timedelta(days=31))
        fresh = make_insight("y", type="cultural", created_at=NOW)

        assert is_expired(expired, NOW)
        assert ids(active_insights([expired, fresh], NOW)) == ["y"]

    def test_expiry_exactly_now_is_not_expired(self):
        insight = make_insight("x", type="cultural", created_at=NOW - timedelta(days=30))
        assert not is_expired(insight, NOW)

    def test_expiring_soon_window(self):
        within = make_insight("in", type="cultural", expires_at=NOW + timedelta(hours=12))
        boundary = make_insight("edge", type="cultural", expires_at=NOW + WINDOW)
        beyond = make_insight("out", type="cultural", expires_at=NOW + timedelta(hours=25))
        no_expiry = make_insight("none")

        assert is_expiring_soon(within, NOW, WINDOW)
        assert is_expiring_soon(boundary, NOW, WINDOW)
        assert not is_expiring_soon(beyond, NOW, WINDOW)
        assert not is_expiring_soon(no_expiry, NOW, WINDOW)


class TestFiltering:

    def test_empty_spec_keeps_everything_live(self):
        insights = [make_insight("a"), make_insight("b", type="cultural", expires_at=NOW - timedelta(seconds=1))]
        assert ids(filter_insights(insights, FilterSpec(), NOW)) == ["a"]

    def test_filters_compose_with_and(self):
        insights = [
            make_insight("both", type="warning", category="spending", is_personalized=True),
            make_insight("wrong-type", type="tip", category="spending", is_personalized=True),
            make_insight("not-personal", type="warning", category="spending"),
            make_insight("wrong-category", type="warning", category="saving", is_personalized=True),
        ]
        spec = FilterSpec(
            category=InsightCategory.SPENDING,
            insight_type=InsightType.WARNING,
            personalized=True,
        )
        assert ids(filter_insights(insights, spec, NOW)) == ["both"]

    def test_expiring_filter(self):
        insights = [
            make_insight("soon", type="cultural", expires_at=NOW + timedelta(hours=3)),
            make_insight("later", type="cultural", expires_at=NOW + timedelta(days=10)),
        ]
        assert ids(filter_insights(insights, FilterSpec(expiring=True), NOW, WINDOW)) == ["soon"]

    @pytest.mark.parametrize("option,expected", [
        ("all", FilterSpec()),
        ("expiring", FilterSpec(expiring=True)),
        ("personalized", FilterSpec(personalized=True)),
        ("risk_alert", FilterSpec(insight_type=InsightType.RISK_ALERT)),
    ])
    def test_from_option(self, option, expected):
        assert FilterSpec.from_option(option) == expected

    def test_from_option_rejects_unknown(self):
        with pytest.raises(ValueError, match="Unsupported filter option") as exc_info:
            FilterSpec.from_option("everything")
        assert exc_info.value.__cause__ is None
        assert exc_info.value.__suppress_context__

    def test_apply_view_filters_then_sorts(self):
        insights = [
            make_insight("a", 2, is_personalized=True),
            make_insight("b", 8),
            make_insight("c", 6, is_personalized=True),
        ]
        view = apply_view(insights, FilterSpec(personalized=True), SortOption.PRIORITY, NOW)
        assert ids(view) == ["c", "a"]


class TestFilterCounts:

    def test_counts_per_option(self):
        insights = [
            make_insight("w1", type="warning", is_personalized=True),
            make_insight("w2", type="warning"),
            make_insight("c1", type="cultural", expires_at=NOW + timedelta(hours=2), is_personalized=True),
            make_insight("gone", type="cultural", expires_at=NOW - timedelta(hours=2)),
        ]
        counts = filter_counts(insights, NOW, WINDOW)

        assert counts["all"] == 3
        assert counts["expiring"] == 1
        assert counts["personalized"] == 2
        assert counts["warning"] == 2
        assert counts["cultural"] == 1


class TestPaginate:

    def test_caps_and_reports_more(self):
        insights = [make_insight(str(n)) for n in range(8)]
        page = paginate(insights, 6)

        assert len(page.items) == 6
        assert page.total == 8
        assert page.has_more
        assert page.hidden_count == 2

    def test_show_all_expands(self):
        insights = [make_insight(str(n)) for n in range(8)]
        page = paginate(insights, 6, show_all=True)

        assert len(page.items) == 8
        assert page.hidden_count == 0

    def test_short_list_has_no_more(self):
        page = paginate([make_insight("a")], 6)
        assert not page.has_more
