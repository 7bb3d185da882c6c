"""
Retrieval service for similarity search over the knowledge base.

Embeds a query, asks the vector index for nearest neighbours and keeps
those above the configured score threshold, in index order.

Dependencies: kb_rag.core.embedder, kb_rag.boundary.vdb
System role: Read path of the RAG pipeline
"""

import logging

from kb_rag.boundary.vdb.index_schemas import IndexMatch
from kb_rag.boundary.vdb.pinecone_index_client import PineconeIndexClient
from kb_rag.configs.retrieval import RetrievalSettings
from kb_rag.core.embedder import Embedder
from kb_rag.core.exceptions import ValidationError
from kb_rag.models.search import RetrievalOutcome, SearchResult

logger = logging.getLogger(__name__)


class RetrievalService:
    """
    Query-time retrieval over the vector index.

    Coordinates query embedding, nearest-neighbour lookup and score
    filtering. Stateless apart from its collaborators.
    """

    def __init__(
        self,
        embedder: Embedder,
        index_client: PineconeIndexClient,
        settings: RetrievalSettings | None = None,
    ) -> None:
        """
        Initialize retrieval service.

        Args:
            embedder: Query embedder
            index_client: Vector index client
            settings: Default top-K and minimum score
        """
        self.embedder = embedder
        self.index_client = index_client
        self.settings = settings or RetrievalSettings()

    async def search(
        self,
        query: str,
        top_k: int | None = None,
        namespace: str | None = None,
    ) -> list[SearchResult]:
        """
        Search the knowledge base for fragments relevant to a query.

        Args:
            query: Free-text query
            top_k: Number of neighbours to request (configured default if omitted)
            namespace: Namespace to search (default partition when omitted)

        Returns:
            list[SearchResult]: Matches scoring at least min_score, in index order

        Raises:
            ValidationError: When query is empty
            ServiceError: When embedding or the index query fails
        """
        if not query or not query.strip():
            raise ValidationError("Query is required", field="query")

        top_k = top_k or self.settings.top_k
        vector = await self.embedder.embed(query)
        matches = await self.index_client.query(vector, top_k=top_k, namespace=namespace)

        results = [
            self._to_result(match) for match in matches if match.score >= self.settings.min_score
        ]
        logger.info(
            f"{__name__}:search - {len(results)}/{len(matches)} matches above "
            f"min_score={self.settings.min_score}"
        )
        return results

    async def try_search(
        self,
        query: str,
        top_k: int | None = None,
        namespace: str | None = None,
    ) -> RetrievalOutcome:
        """
        Best-effort search: failures are returned instead of raised.

        Returns:
            RetrievalOutcome: Results on success, or the error with no results
        """
        try:
            results = await self.search(query, top_k=top_k, namespace=namespace)
        except Exception as e:
            return RetrievalOutcome(error=e)
        return RetrievalOutcome(results=results)

    @staticmethod
    def _to_result(match: IndexMatch) -> SearchResult:
        return SearchResult(
            content=str(match.metadata.get("text", "")),
            metadata=match.metadata,
            score=match.score,
        )
