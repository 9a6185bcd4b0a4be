"""Tests for asset sources: NDJSON snapshots, SQL store, factory."""

import json

import pytest
from sqlalchemy import create_engine, text

from storygraph.models.asset import AssetRecord
from storygraph.services.asset_source import (
    AssetSourceUnavailableError,
    InMemoryAssetSource,
    NdjsonAssetSource,
    SqlAssetSource,
    create_asset_source,
    get_asset_source,
)


# ---- NDJSON ----

class TestNdjsonAssetSource:

    def test_load(self, ndjson_file):
        assets = NdjsonAssetSource(ndjson_file).load()
        assert [a.id for a in assets] == ["0xroot", "0xchild"]
        assert assets[1].parent_ids == ("0xroot",)

    def test_skips_bad_lines(self, tmp_path, indexer_rows):
        path = tmp_path / "assets.ndjson"
        lines = [
            json.dumps(indexer_rows[0]),
            "",
            "{not json",
            json.dumps([1, 2]),
            json.dumps({"nftMetadata": {"tokenContract": "0xc"}}),
            json.dumps({"ipId": "string-metadata", "nftMetadata": "oops"}),
            json.dumps({"ipId": "list-metadata", "nftMetadata": ["oops"]}),
            json.dumps({"id": "canonical", "groupKey": "C"}),
        ]
        path.write_text("\n".join(lines))

        assets = NdjsonAssetSource(path).load()

        assert [a.id for a in assets] == ["0xroot", "canonical"]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "assets.ndjson"
        path.write_text("")
        assert NdjsonAssetSource(path).load() == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(AssetSourceUnavailableError):
            NdjsonAssetSource(tmp_path / "missing.ndjson").load()

    def test_skips_undecodable_line(self, tmp_path, indexer_rows):
        path = tmp_path / "assets.ndjson"
        path.write_bytes(
            json.dumps(indexer_rows[0]).encode("utf-8")
            + b"\n{\"ipId\": \"\xff\"}\n"
            + json.dumps(indexer_rows[1]).encode("utf-8")
        )

        assets = NdjsonAssetSource(path).load()

        assert [a.id for a in assets] == ["0xroot", "0xchild"]

    def test_unreadable_path(self, tmp_path):
        with pytest.raises(AssetSourceUnavailableError):
            NdjsonAssetSource(tmp_path).load()


# ---- SQL ----

@pytest.fixture
def sqlite_url(tmp_path):
    """SQLite analytics store with JSON text columns."""
    url = f"sqlite:///{tmp_path / 'analytics.db'}"
    engine = create_engine(url)
    with engine.begin() as conn:
        conn.execute(text(
            "CREATE TABLE assets ("
            "ipId TEXT, nftMetadata TEXT, rootIpIds TEXT, "
            "childrenCount INTEGER, descendantCount INTEGER, parentCount INTEGER, isGroup INTEGER)"
        ))
        rows = [
            ("0xa", {"tokenContract": "0xc", "name": "A"}, [], 1, 1, 0),
            ("0xb", {"tokenContract": "0xc"}, ["0xa"], 0, 0, 1),
            ("0xc", {"tokenContract": "0xd"}, [], 3, 9, 0),
        ]
        for ip_id, metadata, roots, children, descendants, parents in rows:
            conn.execute(
                text(
                    "INSERT INTO assets VALUES "
                    "(:ipId, :nftMetadata, :rootIpIds, :children, :descendants, :parents, 0)"
                ),
                {
                    "ipId": ip_id,
                    "nftMetadata": json.dumps(metadata),
                    "rootIpIds": json.dumps(roots),
                    "children": children,
                    "descendants": descendants,
                    "parents": parents,
                },
            )
        conn.execute(text(
            "INSERT INTO assets VALUES ('0xbad', '{oops', '[]', 0, 0, 0, 0)"
        ))
        conn.execute(text(
            "INSERT INTO assets VALUES ('0xstr', '\"oops\"', '[]', 0, 0, 0, 0)"
        ))
    engine.dispose()
    return url


class TestSqlAssetSource:

    def test_load_ordered_by_descendants(self, sqlite_url):
        assets = SqlAssetSource(database_url=sqlite_url).load()
        assert [a.id for a in assets] == ["0xc", "0xa", "0xb"]

    def test_decodes_json_columns(self, sqlite_url):
        assets = {a.id: a for a in SqlAssetSource(database_url=sqlite_url).load()}
        assert assets["0xa"].group_key == "0xc"
        assert assets["0xa"].display_name == "A"
        assert assets["0xb"].parent_ids == ("0xa",)
        assert assets["0xb"].is_group_aggregate is False

    def test_skips_rows_with_bad_metadata(self, sqlite_url):
        ids = {a.id for a in SqlAssetSource(database_url=sqlite_url).load()}
        assert "0xbad" not in ids
        assert "0xstr" not in ids

    def test_limit(self, sqlite_url):
        assets = SqlAssetSource(database_url=sqlite_url, limit=2).load()
        assert [a.id for a in assets] == ["0xc", "0xa"]

    def test_missing_table(self, sqlite_url):
        source = SqlAssetSource(database_url=sqlite_url, table="missing")
        with pytest.raises(AssetSourceUnavailableError):
            source.load()

    def test_rejects_unsafe_table_name(self, sqlite_url):
        with pytest.raises(ValueError):
            SqlAssetSource(database_url=sqlite_url, table="assets; DROP TABLE assets")

    def test_schema_qualified_table_name(self, sqlite_url):
        assert SqlAssetSource(database_url=sqlite_url, table="analytics.assets").table == "analytics.assets"

    def test_no_database_url(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        with pytest.raises(AssetSourceUnavailableError):
            SqlAssetSource().load()


# ---- Factory ----

class TestCreateAssetSource:

    def test_default_is_ndjson(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ASSETS_PATH", str(tmp_path / "snapshot.ndjson"))
        source = create_asset_source()
        assert isinstance(source, NdjsonAssetSource)
        assert source.path == tmp_path / "snapshot.ndjson"

    def test_sql(self):
        assert isinstance(create_asset_source("sql"), SqlAssetSource)

    def test_unknown(self):
        with pytest.raises(ValueError):
            create_asset_source("carrier-pigeon")

    def test_get_asset_source_singleton(self):
        assert get_asset_source() is get_asset_source()


class TestInMemoryAssetSource:

    def test_returns_copy(self):
        source = InMemoryAssetSource([AssetRecord(id="x")])
        loaded = source.load()
        loaded.clear()
        assert len(source.load()) == 1
