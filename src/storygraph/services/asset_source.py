"""
Asset sources.

Load the flat collection of IP asset records from an NDJSON snapshot or
from the analytics store. Bad records are skipped; an unreadable source
raises AssetSourceUnavailableError.
"""

import json
from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable

import structlog
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from storygraph.config import SQL_IDENTIFIER, get_settings
from storygraph.models.asset import AssetRecord

logger = structlog.get_logger(__name__)

# Columns stored as JSON text by the analytics export
JSON_COLUMNS = ("nftMetadata", "rootIpIds")


class AssetSourceUnavailableError(Exception):
    """The upstream asset collection could not be read."""


class AssetSource(ABC):
    """A source of asset records."""

    name: str = "asset_source"

    @abstractmethod
    def load(self) -> list[AssetRecord]:
        """Read a fresh snapshot of all asset records."""

    def _parse_rows(self, rows: Iterable[tuple[int, Any]]) -> list[AssetRecord]:
        """Validate raw rows, skipping the ones that are not usable records."""
        assets = []
        skipped = 0

        for position, raw in rows:
            if not isinstance(raw, dict):
                logger.warning(
                    "malformed_record_skipped",
                    source=self.name,
                    position=position,
                    error="record is not an object",
                )
                skipped += 1
                continue
            try:
                assets.append(AssetRecord.from_raw(raw))
            except ValueError as e:
                # pydantic ValidationError is a ValueError
                logger.warning(
                    "malformed_record_skipped",
                    source=self.name,
                    position=position,
                    error=str(e),
                )
                skipped += 1

        logger.info("assets_loaded", source=self.name, count=len(assets), skipped=skipped)
        return assets


class NdjsonAssetSource(AssetSource):
    """
    Newline-delimited JSON snapshot on disk.

    Blank lines are ignored. Lines that are not valid JSON or not valid
    records are logged and skipped.
    """

    name = "ndjson"

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> list[AssetRecord]:
        if not self.path.exists():
            raise AssetSourceUnavailableError(f"Assets file not found: {self.path}")

        try:
            content = self.path.read_bytes()
        except OSError as e:
            logger.error("asset_file_read_failed", path=str(self.path), error=str(e))
            raise AssetSourceUnavailableError(f"Could not read assets file: {self.path}") from e

        return self._parse_rows(self._decode_lines(content))

    def _decode_lines(self, content: bytes):
        for line_number, raw_line in enumerate(content.split(b"\n"), start=1):
            if not raw_line.strip():
                continue
            try:
                yield line_number, json.loads(raw_line.decode("utf-8"))
            except (UnicodeDecodeError, json.JSONDecodeError) as e:
                logger.warning(
                    "malformed_record_skipped",
                    source=self.name,
                    position=line_number,
                    error=str(e),
                )


class SqlAssetSource(AssetSource):
    """
    Asset table in the analytics store, read through SQLAlchemy.

    Rows are ordered by descendant and children count so that a row limit
    keeps the most connected assets.
    """

    name = "sql"

    def __init__(
        self,
        database_url: str | None = None,
        table: str | None = None,
        limit: int | None = None,
        engine: Engine | None = None,
    ):
        settings = get_settings()
        self.database_url = database_url or settings.database_url
        self.table = table or settings.asset_table
        if not SQL_IDENTIFIER.fullmatch(self.table):
            raise ValueError(f"Not a valid table name: {self.table!r}")
        self.limit = limit or settings.asset_query_limit
        self._engine = engine

    @property
    def engine(self) -> Engine:
        """Get or create the SQLAlchemy engine."""
        if self._engine is None:
            if not self.database_url:
                raise AssetSourceUnavailableError("No database_url configured for SQL asset source")
            self._engine = create_engine(self.database_url, pool_pre_ping=True)
        return self._engine

    @property
    def query(self) -> str:
        return (
            f"SELECT * FROM {self.table} "
            "ORDER BY descendantCount DESC, childrenCount DESC "
            "LIMIT :limit"
        )

    def load(self) -> list[AssetRecord]:
        try:
            with self.engine.connect() as conn:
                rows = [dict(row) for row in conn.execute(text(self.query), {"limit": self.limit}).mappings()]
        except SQLAlchemyError as e:
            logger.error("asset_query_failed", table=self.table, error=str(e))
            raise AssetSourceUnavailableError("Failed to fetch assets from the analytics store") from e

        return self._parse_rows(
            (position, self._decode_json_columns(row))
            for position, row in enumerate(rows, start=1)
        )

    @staticmethod
    def _decode_json_columns(row: dict[str, Any]) -> Any:
        for column in JSON_COLUMNS:
            value = row.get(column)
            if isinstance(value, str):
                try:
                    row[column] = json.loads(value) if value else None
                except json.JSONDecodeError:
                    # Undecodable column, the row is skipped
                    return None
        return row


class InMemoryAssetSource(AssetSource):
    """Fixed collection of records, for fixtures and CLI pipes."""

    name = "memory"

    def __init__(self, assets: Iterable[AssetRecord]):
        self.assets = list(assets)

    def load(self) -> list[AssetRecord]:
        return list(self.assets)


def create_asset_source(kind: str | None = None) -> AssetSource:
    """Build the asset source named by ``kind`` or by settings."""
    settings = get_settings()
    kind = kind or settings.asset_source

    if kind == "ndjson":
        return NdjsonAssetSource(settings.assets_path)
    if kind == "sql":
        return SqlAssetSource()
    raise ValueError(f"Unknown asset source: {kind}")


@lru_cache()
def get_asset_source() -> AssetSource:
    """Get cached asset source instance."""
    return create_asset_source()
