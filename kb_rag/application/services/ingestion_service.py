"""
Ingestion service for indexing documents.

Orchestrates the write path: index provisioning, chunking, batch
embedding and batched upsert.

Dependencies: kb_rag.core.chunker, kb_rag.core.embedder, kb_rag.boundary.vdb
System role: Write path of the RAG pipeline
"""

import logging
from collections.abc import Sequence
from uuid import uuid4

from kb_rag.boundary.vdb.index_schemas import IndexedRecord
from kb_rag.boundary.vdb.pinecone_index_client import PineconeIndexClient
from kb_rag.core.chunker import SentenceWindowChunker
from kb_rag.core.embedder import Embedder
from kb_rag.core.exceptions import ValidationError
from kb_rag.models.document import Chunk, Document, IngestResult

logger = logging.getLogger(__name__)


class IngestionService:
    """
    Document ingestion service.

    Turns caller documents into embedded chunk records and writes them to
    the vector index. Each call gets its own id prefix so concurrent
    ingests never collide.
    """

    def __init__(
        self,
        chunker: SentenceWindowChunker,
        embedder: Embedder,
        index_client: PineconeIndexClient,
    ) -> None:
        self.chunker = chunker
        self.embedder = embedder
        self.index_client = index_client

    async def ingest(
        self,
        documents: Sequence[Document],
        namespace: str | None = None,
    ) -> IngestResult:
        """
        Index documents into the knowledge base.

        Flow:
        1. Ensure the index exists
        2. Chunk every document
        3. Embed all chunk texts in one batch call
        4. Upsert records carrying chunk text and metadata

        Args:
            documents: Documents to index
            namespace: Target namespace (default partition when omitted)

        Returns:
            IngestResult: Indexed record count, document count and chunk count

        Raises:
            ValidationError: When no documents are supplied
            ServiceError: When provisioning, embedding or upsert fails
        """
        if not documents:
            raise ValidationError("At least one document is required", field="documents")

        await self.index_client.ensure_exists()

        chunks: list[Chunk] = []
        for document in documents:
            chunks.extend(self.chunker.chunk_document(document))

        if not chunks:
            logger.info(f"{__name__}:ingest - No chunks produced from {len(documents)} documents")
            return IngestResult(indexed=0, original_documents=len(documents), chunks=0)

        vectors = await self.embedder.embed_batch([chunk.content for chunk in chunks])

        ingest_id = uuid4().hex
        records = [
            IndexedRecord(
                id=f"{ingest_id}-{position}",
                values=vector,
                metadata={"text": chunk.content, **chunk.metadata},
            )
            for position, (chunk, vector) in enumerate(zip(chunks, vectors, strict=True))
        ]

        indexed = await self.index_client.upsert(records, namespace=namespace)
        logger.info(
            f"{__name__}:ingest - Indexed {indexed} chunks from {len(documents)} documents",
            extra={"ingest_id": ingest_id, "namespace": namespace or ""},
        )
        return IngestResult(
            indexed=indexed,
            original_documents=len(documents),
            chunks=len(chunks),
        )

    async def delete_namespace(self, namespace: str) -> None:
        """Remove every record in a namespace."""
        await self.index_client.delete_namespace(namespace)
