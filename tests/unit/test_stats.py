"""Tests for the stats summarizer."""

from storygraph.pipeline.grouping import group_assets
from storygraph.pipeline.stats import summarize


class TestSummarize:

    def test_empty(self):
        stats = summarize(group_assets([]), [], [], [])
        assert stats.total_assets == 0
        assert stats.total_groups == 0
        assert stats.largest_group == 0
        assert stats.tier_breakdown.tiny == 0

    def test_counts_all_groups(self, make_group):
        assets = make_group("L", 120) + make_group("M", 30) + make_group("T", 3)
        groups = group_assets(assets)
        qualifying = [groups.groups["M"]]

        stats = summarize(groups, qualifying, ["n1", "n2"], [])

        assert stats.total_assets == 153
        assert stats.total_groups == 3
        assert stats.visible_groups == 1
        assert stats.largest_group == 120
        assert stats.tier_breakdown.large == 1
        assert stats.tier_breakdown.medium == 1
        assert stats.tier_breakdown.tiny == 1
        assert stats.node_count == 2
        assert stats.edge_count == 0

    def test_optional_fields_unset(self, make_group):
        groups = group_assets(make_group("A", 5))
        stats = summarize(groups, [], [], [])
        assert stats.optimized_nodes is None
        assert stats.filtered_communities is None
