"""
Services for storygraph.
"""

from storygraph.services.asset_source import (
    AssetSource,
    AssetSourceUnavailableError,
    InMemoryAssetSource,
    NdjsonAssetSource,
    SqlAssetSource,
    create_asset_source,
    get_asset_source,
)
from storygraph.services.network_service import NetworkViewService, get_network_service

__all__ = [
    "AssetSource",
    "AssetSourceUnavailableError",
    "InMemoryAssetSource",
    "NdjsonAssetSource",
    "SqlAssetSource",
    "create_asset_source",
    "get_asset_source",
    "NetworkViewService",
    "get_network_service",
]
