"""
API route modules.
"""

from storygraph.api.routes import assets, network

__all__ = ["assets", "network"]
