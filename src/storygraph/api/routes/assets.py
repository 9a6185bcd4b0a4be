"""
Asset listing routes.
"""

from fastapi import APIRouter, Depends, Query
from starlette.concurrency import run_in_threadpool

from storygraph.models.api import AssetSummaryResponse
from storygraph.services.network_service import NetworkViewService, get_network_service

router = APIRouter()


@router.get("", response_model=list[AssetSummaryResponse])
async def list_assets(
    limit: int = Query(default=100, ge=1, le=1000),
    service: NetworkViewService = Depends(get_network_service),
) -> list[AssetSummaryResponse]:
    """
    List assets, most-derived first.
    """
    assets = await run_in_threadpool(service.list_assets, limit)
    return [AssetSummaryResponse.from_record(a) for a in assets]
