"""
Index status API endpoints.

Routes: GET /stats - Index readiness, record count and dimension

Dependencies: kb_rag.boundary.vdb
System role: Index status HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from kb_rag.api.deps import get_index_client
from kb_rag.boundary.vdb.pinecone_index_client import PineconeIndexClient
from kb_rag.models.stats import StatsResponse
from kb_rag.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

NOT_READY_MESSAGE = "Index not found or not ready"

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=StatsResponse, response_model_exclude_none=True)
async def get_stats(
    index_client: PineconeIndexClient = Depends(get_index_client),
) -> StatsResponse:
    """Report whether the index exists and, if so, its size."""
    try:
        if not await index_client.is_ready():
            return StatsResponse(ready=False, message=NOT_READY_MESSAGE)

        stats = await index_client.describe_stats()
    except Exception as e:
        log_exception_with_context(logger, f"{__name__}:get_stats - Stats lookup failed", e)
        raise HTTPException(status_code=500, detail="Failed to get index stats")

    return StatsResponse(
        ready=True,
        total_vectors=stats.record_count,
        dimension=stats.dimension,
    )
