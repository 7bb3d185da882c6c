"""
Pinecone vector index client wrapper.

Provides high-level interface for index lifecycle, batched upsert,
similarity query, namespace deletion and statistics. SDK calls are
blocking, so each one runs in the threadpool under a timeout. SDK
failures are translated into the application's service error categories.

Dependencies: pinecone, fastapi.concurrency, kb_rag.configs, kb_rag.core.exceptions
System role: Vector index client for embedding storage and retrieval
"""

import asyncio
import logging
import threading
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from fastapi.concurrency import run_in_threadpool
from pinecone import (
    ConflictError,
    Pinecone,
    PineconeConnectionError,
    RateLimitError,
    ServerlessSpec,
)
from pinecone.exceptions import (
    ForbiddenException,
    NotFoundException,
    PineconeApiException,
    ServiceException,
    UnauthorizedException,
)

from kb_rag.boundary.vdb.index_schemas import IndexedRecord, IndexMatch, IndexStats
from kb_rag.configs.vector_index import VectorIndexSettings
from kb_rag.core.exceptions import (
    AuthError,
    NotFoundError,
    ServiceError,
    TransientServiceError,
    UnknownServiceError,
    ValidationError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

SERVICE_NAME = "pinecone"
HTTP_CONFLICT = 409


def error_status(exc: Exception) -> int | None:
    """HTTP status of an SDK error (`status_code` on current releases, `status` on older ones)."""
    for attr in ("status_code", "status"):
        status = getattr(exc, attr, None)
        if isinstance(status, int):
            return status
    return None


def classify_index_error(exc: Exception, operation: str) -> ServiceError:
    """
    Map a Pinecone SDK (or transport) failure onto the service error taxonomy.

    Args:
        exc: Original exception
        operation: Operation that failed

    Returns:
        ServiceError: AuthError, NotFoundError, TransientServiceError or UnknownServiceError
    """
    if isinstance(exc, ServiceError):
        return exc

    status = error_status(exc)

    if isinstance(exc, (UnauthorizedException, ForbiddenException)) or status in (401, 403):
        error_cls: type[ServiceError] = AuthError
    elif isinstance(exc, NotFoundException) or status == 404:
        error_cls = NotFoundError
    elif isinstance(
        exc,
        (ServiceException, RateLimitError, PineconeConnectionError, TimeoutError, ConnectionError),
    ):
        error_cls = TransientServiceError
    elif status is not None and (status in (408, 429) or status >= 500):
        error_cls = TransientServiceError
    else:
        error_cls = UnknownServiceError

    details: dict[str, Any] = {"error_type": type(exc).__name__}
    if status is not None:
        details["status"] = status
    if isinstance(exc, PineconeApiException) and getattr(exc, "reason", None):
        details["reason"] = exc.reason

    return error_cls(
        f"Pinecone {operation} failed: {str(exc) or type(exc).__name__}",
        service=SERVICE_NAME,
        operation=operation,
        details=details,
    )


class PineconeIndexClient:
    """
    Pinecone client for one named serverless index.

    The SDK client and index handle are created lazily on first use and
    shared by all callers; creation is guarded by a lock. Namespaces are
    optional partitions of the same index.
    """

    def __init__(
        self,
        settings: VectorIndexSettings | None = None,
        dimension: int = 384,
        client: Any | None = None,
    ) -> None:
        """
        Initialize index client configuration.

        Args:
            settings: Index name, deployment spec, batching and timeout
            dimension: Embedding dimension used when the index must be created
            client: Optional pre-built Pinecone client (tests inject fakes here)
        """
        self._settings = settings or VectorIndexSettings()
        self._dimension = dimension
        self._client = client
        self._owns_client = client is None
        self._index: Any | None = None
        self._lock = threading.Lock()
        self._ensure_lock = asyncio.Lock()

    @property
    def index_name(self) -> str:
        return self._settings.index_name

    @property
    def dimension(self) -> int:
        return self._dimension

    def _get_client(self) -> Any:
        """Return the shared Pinecone client, creating it on first call."""
        if self._client is None:
            with self._lock:
                if self._client is None:
                    if not self._settings.api_key:
                        raise AuthError(
                            "PINECONE_API_KEY is required",
                            service=SERVICE_NAME,
                            operation="connect",
                        )
                    self._client = Pinecone(api_key=self._settings.api_key)
        return self._client

    def _get_index(self) -> Any:
        """Return the shared index handle, creating it on first call."""
        if self._index is None:
            client = self._get_client()
            with self._lock:
                if self._index is None:
                    self._index = client.Index(self._settings.index_name)
        return self._index

    def reset(self) -> None:
        """Drop cached handles so the next call reconnects."""
        with self._lock:
            self._index = None
            if self._owns_client:
                self._client = None

    async def _call(self, operation: str, func: Callable[..., T], *args: Any) -> T:
        """Run a blocking SDK call in the threadpool with timeout and error mapping."""
        try:
            return await asyncio.wait_for(
                run_in_threadpool(func, *args),
                timeout=self._settings.request_timeout_seconds,
            )
        except ServiceError:
            raise
        except Exception as e:
            error = classify_index_error(e, operation)
            logger.error(
                f"{__name__}:{operation} - {type(error).__name__}: {type(e).__name__}: {e}"
            )
            raise error from e

    def _list_index_names(self) -> list[str]:
        return list(self._get_client().list_indexes().names())

    def _create_index(self) -> None:
        self._get_client().create_index(
            name=self._settings.index_name,
            dimension=self._dimension,
            metric=self._settings.metric,
            spec=ServerlessSpec(cloud=self._settings.cloud, region=self._settings.region),
        )

    def _upsert_batch(self, vectors: list[dict[str, Any]], namespace: str | None) -> None:
        if namespace:
            self._get_index().upsert(vectors=vectors, namespace=namespace)
        else:
            self._get_index().upsert(vectors=vectors)

    def _query(self, vector: list[float], top_k: int, namespace: str | None) -> Any:
        kwargs: dict[str, Any] = {"vector": vector, "top_k": top_k, "include_metadata": True}
        if namespace:
            kwargs["namespace"] = namespace
        return self._get_index().query(**kwargs)

    def _delete_all(self, namespace: str) -> None:
        self._get_index().delete(delete_all=True, namespace=namespace)

    def _describe_index_stats(self) -> Any:
        return self._get_index().describe_index_stats()

    async def is_ready(self) -> bool:
        """
        Check whether the index exists.

        Never raises: any failure while checking is reported as not ready.

        Returns:
            bool: True when the index name is listed by the service
        """
        try:
            names = await self._call("list_indexes", self._list_index_names)
        except Exception as e:
            logger.warning(f"{__name__}:is_ready - Readiness check failed: {type(e).__name__}: {e}")
            return False
        return self._settings.index_name in names

    async def ensure_exists(self) -> None:
        """
        Create the index if it does not exist, then wait for provisioning.

        Idempotent: a no-op when the index is already listed. Creation is
        not retried; a failure propagates to the caller.

        Raises:
            ServiceError: When the create call fails
        """
        async with self._ensure_lock:
            if await self.is_ready():
                logger.debug(f"{__name__}:ensure_exists - Index {self.index_name} already exists")
                return

            logger.info(
                f"{__name__}:ensure_exists - Creating index {self.index_name} "
                f"(dimension={self._dimension}, metric={self._settings.metric}, "
                f"{self._settings.cloud}/{self._settings.region})"
            )
            try:
                await self._call("create_index", self._create_index)
            except ServiceError as e:
                conflict = isinstance(e.__cause__, ConflictError)
                if conflict or e.details.get("status") == HTTP_CONFLICT:
                    logger.info(f"{__name__}:ensure_exists - Index created concurrently, skipping")
                    return
                raise

            logger.info(
                f"{__name__}:ensure_exists - Waiting {self._settings.settle_seconds}s "
                "for index provisioning"
            )
            await asyncio.sleep(self._settings.settle_seconds)

    async def upsert(
        self,
        records: Sequence[IndexedRecord],
        namespace: str | None = None,
    ) -> int:
        """
        Upsert records in fixed-size batches, sequentially and in order.

        Args:
            records: Records with caller-assigned ids
            namespace: Target namespace (default partition when omitted)

        Returns:
            int: Total records written

        Raises:
            ServiceError: When any batch fails
        """
        batch_size = self._settings.upsert_batch_size
        total = 0
        for start in range(0, len(records), batch_size):
            vectors = [record.to_vector() for record in records[start : start + batch_size]]
            await self._call("upsert", self._upsert_batch, vectors, namespace)
            total += len(vectors)

        logger.info(
            f"{__name__}:upsert - Upserted {total} records",
            extra={"namespace": namespace or "", "index": self.index_name},
        )
        return total

    async def query(
        self,
        vector: list[float],
        top_k: int,
        namespace: str | None = None,
    ) -> list[IndexMatch]:
        """
        Query nearest neighbours with metadata.

        Args:
            vector: Query embedding
            top_k: Number of matches to request
            namespace: Namespace to search (default partition when omitted)

        Returns:
            list[IndexMatch]: Matches in the order returned by the index
        """
        response = await self._call("query", self._query, vector, top_k, namespace)
        return [
            IndexMatch(
                id=str(match.id),
                score=float(match.score or 0.0),
                metadata=dict(match.metadata or {}),
            )
            for match in (response.matches or [])
        ]

    async def delete_namespace(self, namespace: str) -> None:
        """
        Irreversibly delete every record in a namespace.

        Raises:
            ValidationError: When namespace is empty
            ServiceError: When the delete call fails
        """
        if not namespace:
            raise ValidationError("Namespace is required", field="namespace")

        await self._call("delete_namespace", self._delete_all, namespace)
        logger.info(f"{__name__}:delete_namespace - Deleted all records in namespace {namespace}")

    async def describe_stats(self) -> IndexStats:
        """
        Read record count and dimension of the index.

        Returns:
            IndexStats: Total records and vector dimension
        """
        stats = await self._call("describe_index_stats", self._describe_index_stats)
        return IndexStats(
            record_count=int(getattr(stats, "total_vector_count", 0) or 0),
            dimension=int(getattr(stats, "dimension", 0) or self._dimension),
        )
