"""
storygraph: network graph data for IP asset lineage.

This package groups indexed IP assets by collection and turns them into
size-bounded node/edge graphs for force-directed visualization.
"""

__version__ = "0.1.0"

from storygraph.config import get_settings

__all__ = ["get_settings", "__version__"]
