"""
Network graph routes.
"""

import structlog
from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from storygraph.models.graph import CommunityView, NetworkView
from storygraph.services.network_service import NetworkViewService, get_network_service

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get(
    "/community",
    response_model=CommunityView,
    response_model_exclude_none=True,
)
async def get_community_view(
    service: NetworkViewService = Depends(get_network_service),
) -> CommunityView:
    """
    One node per collection with at least five assets.
    """
    return await run_in_threadpool(service.get_community_view)


@router.get(
    "/optimized",
    response_model=NetworkView,
    response_model_exclude_none=True,
)
async def get_optimized_view(
    service: NetworkViewService = Depends(get_network_service),
) -> NetworkView:
    """
    Per-asset network with aggressive sampling.
    """
    return await run_in_threadpool(service.get_optimized_view)


@router.get(
    "/full",
    response_model=NetworkView,
    response_model_exclude_none=True,
)
async def get_full_view(
    service: NetworkViewService = Depends(get_network_service),
) -> NetworkView:
    """
    Per-asset network with the full cross-collection edge budget.
    """
    return await run_in_threadpool(service.get_full_view)
