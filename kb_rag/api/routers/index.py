"""
Indexing API endpoints.

Routes:
- POST /index - Chunk, embed and store documents
- DELETE /index/namespaces/{namespace} - Remove every record in a namespace

Dependencies: kb_rag.application.services.ingestion_service
System role: Knowledge-base write HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from kb_rag.api.deps import get_ingestion_service
from kb_rag.application.services.ingestion_service import IngestionService
from kb_rag.core.exceptions import ValidationError
from kb_rag.models.document import Document
from kb_rag.models.ingest import DeleteNamespaceResponse, IngestRequest, IngestResponse
from kb_rag.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/index", tags=["index"])


@router.post("", response_model=IngestResponse)
async def index_documents(
    request: IngestRequest,
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> IngestResponse:
    """Index documents into the knowledge base.

    Args:
        request: Documents and optional target namespace
        ingestion_service: Injected IngestionService

    Returns:
        IngestResponse: Indexed record, document and chunk counts

    Raises:
        HTTPException(400): No documents supplied
        HTTPException(500): Indexing failed
    """
    try:
        result = await ingestion_service.ingest(
            [Document(content=doc.content, metadata=doc.metadata) for doc in request.documents],
            namespace=request.namespace,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        log_exception_with_context(
            logger,
            f"{__name__}:index_documents - Indexing failed",
            e,
            documents=request.documents,
            namespace=request.namespace,
        )
        raise HTTPException(status_code=500, detail="Failed to index documents")

    return IngestResponse(
        indexed=result.indexed,
        original_documents=result.original_documents,
        chunks=result.chunks,
    )


@router.delete("/namespaces/{namespace}", response_model=DeleteNamespaceResponse)
async def delete_namespace(
    namespace: str,
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> DeleteNamespaceResponse:
    """Delete every record stored under a namespace."""
    try:
        await ingestion_service.delete_namespace(namespace)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        log_exception_with_context(
            logger,
            f"{__name__}:delete_namespace - Namespace deletion failed",
            e,
            namespace=namespace,
        )
        raise HTTPException(status_code=500, detail="Failed to delete namespace")

    return DeleteNamespaceResponse(namespace=namespace)
