"""Tests for competition ranking."""

import pytest

from pizza_standings.models.standings import LeaderboardEntry
from pizza_standings.ranking import competition_ranks, rank_entries


def entry(name: str, rating: float) -> LeaderboardEntry:
    return LeaderboardEntry(
        restaurant_id=name.lower(),
        restaurant_name=name,
        rating=rating,
        category="overall",
    )


class TestCompetitionRanks:
    """Tests for the 1224 rank assignment."""

    def test_ties_share_rank_and_skip(self):
        """Test two leaders share rank 1 and the next entry is 3rd."""
        assert competition_ranks([5.0, 5.0, 4.0, 3.0]) == [1, 1, 3, 4]

    def test_tie_in_the_middle(self):
        """Test a tie below the leader."""
        assert competition_ranks([5.0, 4.0, 4.0, 4.0, 2.0]) == [1, 2, 2, 2, 5]

    def test_all_distinct(self):
        """Test distinct ratings get consecutive ranks."""
        assert competition_ranks([4.9, 4.5, 3.0]) == [1, 2, 3]

    def test_empty(self):
        """Test empty input yields no ranks."""
        assert competition_ranks([]) == []


class TestRankEntries:
    """Tests for ranking leaderboard entries."""

    def test_sorted_descending_with_ties(self):
        """Test entries are ordered by rating and ties are flagged."""
        ranked = rank_entries(
            [entry("C", 4.0), entry("A", 5.0), entry("B", 5.0), entry("D", 3.0)]
        )

        assert [e.restaurant_name for e in ranked] == ["A", "B", "C", "D"]
        assert [e.rank for e in ranked] == [1, 1, 3, 4]
        assert [e.is_tied for e in ranked] == [True, True, False, False]
        assert [e.rank_label for e in ranked] == ["T-1", "T-1", "3", "4"]

    def test_ties_keep_input_order(self):
        """Test the sort is stable for equal ratings."""
        ranked = rank_entries([entry("Zed's", 4.5), entry("Alpha", 4.5)])
        assert [e.restaurant_name for e in ranked] == ["Zed's", "Alpha"]

    def test_ranks_monotonic(self):
        """Test ranks never decrease while ratings never increase."""
        ratings = [3.5, 4.0, 4.0, 2.5, 5.0, 4.0, 3.5]
        ranked = rank_entries([entry(f"R{i}", r) for i, r in enumerate(ratings)])

        for prev, cur in zip(ranked, ranked[1:], strict=False):
            assert prev.rating >= cur.rating
            assert prev.rank <= cur.rank
            if prev.rating == cur.rating:
                assert prev.rank == cur.rank

    def test_rank_counts_entries_strictly_above(self):
        """Test each rank is one plus the number of better entries."""
        ranked = rank_entries([entry(f"R{i}", r) for i, r in enumerate([4, 5, 4, 3, 5])])
        for e in ranked:
            above = sum(1 for other in ranked if other.rating > e.rating)
            assert e.rank == above + 1

    def test_exact_comparison(self):
        """Test nearly equal ratings are not treated as a tie."""
        ranked = rank_entries([entry("A", 4.33), entry("B", 4.330001)])
        assert [e.rank for e in ranked] == [1, 2]
        assert not any(e.is_tied for e in ranked)

    def test_single_entry(self):
        """Test a lone entry is rank 1 and untied."""
        (only,) = rank_entries([entry("Solo", 3.0)])
        assert only.rank == 1
        assert only.is_tied is False
        assert only.rank_label == "1"

    def test_empty(self):
        """Test no entries yields an empty tuple."""
        assert rank_entries([]) == ()

    def test_entry_fields_preserved(self):
        """Test ranking copies every entry field."""
        source = LeaderboardEntry(
            restaurant_id="7",
            restaurant_name="Vito & Nick's",
            restaurant_slug="vito-nicks",
            rating=4.2,
            category="pizza:sausage",
            item_name="Sausage thin crust",
            visit_date="2024-03-02",
        )
        (ranked,) = rank_entries([source])
        assert ranked.restaurant_slug == "vito-nicks"
        assert ranked.item_name == "Sausage thin crust"
        assert ranked.visit_date == "2024-03-02"
        assert ranked.category == "pizza:sausage"

    @pytest.mark.parametrize("count", [2, 3, 5])
    def test_all_equal(self, count):
        """Test an all-way tie puts everyone at rank 1."""
        ranked = rank_entries([entry(f"R{i}", 4.0) for i in range(count)])
        assert {e.rank for e in ranked} == {1}
        assert all(e.is_tied for e in ranked)
