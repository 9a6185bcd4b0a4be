"""Shared pytest fixtures for the storygraph test suite."""

import json

import pytest

from storygraph.models.asset import AssetRecord


# ---------------------------------------------------------------------------
# Singleton cache clearing (autouse)
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def clear_singletons():
    """Clear all @lru_cache singletons between tests."""
    from storygraph.config import get_settings
    from storygraph.services.asset_source import get_asset_source
    from storygraph.services.network_service import get_network_service

    get_settings.cache_clear()
    get_asset_source.cache_clear()
    get_network_service.cache_clear()
    yield
    get_settings.cache_clear()
    get_asset_source.cache_clear()
    get_network_service.cache_clear()


# ---------------------------------------------------------------------------
# Asset factories
# ---------------------------------------------------------------------------

@pytest.fixture
def make_asset():
    """Factory for AssetRecord instances with terse defaults."""
    def _make(asset_id, group_key="A", parents=(), **kwargs):
        return AssetRecord(id=asset_id, group_key=group_key, parent_ids=tuple(parents), **kwargs)
    return _make


@pytest.fixture
def make_group(make_asset):
    """Factory for ``count`` assets in one collection, ids ``{prefix}{i}``."""
    def _make(group_key, count, prefix=None, **kwargs):
        prefix = prefix if prefix is not None else group_key.lower()
        return [make_asset(f"{prefix}{i}", group_key, **kwargs) for i in range(count)]
    return _make


# ---------------------------------------------------------------------------
# Sample datasets
# ---------------------------------------------------------------------------

@pytest.fixture
def two_linked_groups(make_asset):
    """Six assets in A, five in B, with b1 derived from a1."""
    assets = [make_asset(f"a{i}", "A") for i in range(1, 7)]
    assets.append(make_asset("b1", "B", parents=["a1"]))
    assets.extend(make_asset(f"b{i}", "B") for i in range(2, 6))
    return assets


@pytest.fixture
def oversized_group(make_group):
    """150 assets in one collection."""
    return make_group("G", 150, descendant_count=1, children_count=2)


@pytest.fixture
def sparse_medium_group(make_group):
    """25 non-root assets with no links and no derivations."""
    return make_group("M", 25, parent_count=1)


# ---------------------------------------------------------------------------
# Raw indexer rows
# ---------------------------------------------------------------------------

@pytest.fixture
def indexer_rows():
    """Raw rows as exported by the asset indexer."""
    return [
        {
            "ipId": "0xroot",
            "nftMetadata": {
                "tokenContract": "0xcollection",
                "name": "Root Asset",
                "imageUrl": "https://example.com/root.png",
            },
            "rootIpIds": [],
            "childrenCount": 2,
            "descendantCount": 5,
            "parentCount": 0,
            "isGroup": False,
        },
        {
            "ipId": "0xchild",
            "nftMetadata": {"tokenContract": "0xcollection", "name": "Child Asset"},
            "rootIpIds": ["0xroot"],
            "childrenCount": 0,
            "descendantCount": 0,
            "parentCount": 1,
        },
    ]


@pytest.fixture
def ndjson_file(tmp_path, indexer_rows):
    """NDJSON snapshot holding the indexer rows."""
    path = tmp_path / "assets.ndjson"
    path.write_text("\n".join(json.dumps(row) for row in indexer_rows) + "\n")
    return path
