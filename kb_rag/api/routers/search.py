"""
Search API endpoints.

Routes: POST /search - Similarity search over the knowledge base

Dependencies: kb_rag.application.services.retrieval_service
System role: Retrieval HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from kb_rag.api.deps import get_retrieval_service
from kb_rag.application.services.retrieval_service import RetrievalService
from kb_rag.core.exceptions import ValidationError
from kb_rag.models.search import SearchRequest, SearchResponse
from kb_rag.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])


@router.post("", response_model=SearchResponse)
async def search(
    request: SearchRequest,
    retrieval_service: RetrievalService = Depends(get_retrieval_service),
) -> SearchResponse:
    """Search the knowledge base.

    Raises:
        HTTPException(400): Empty query
        HTTPException(500): Embedding or index failure
    """
    try:
        results = await retrieval_service.search(
            request.query,
            top_k=request.top_k,
            namespace=request.namespace,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        log_exception_with_context(
            logger,
            f"{__name__}:search - Search failed",
            e,
            top_k=request.top_k,
            namespace=request.namespace,
        )
        raise HTTPException(status_code=500, detail="Failed to search documents")

    return SearchResponse(results=results, total=len(results))
