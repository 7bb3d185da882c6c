"""
Sentence embedding generator and vector similarity.

Wraps LangChain HuggingFaceEmbeddings (sentence-transformers, mean pooling)
behind a lazily loaded, process-wide model handle. Every vector is
L2-normalized before it is returned so that dot product equals cosine
similarity regardless of model internals.

Dependencies: langchain_huggingface, numpy, fastapi.concurrency
System role: Embedding generation adapter for ingest and query paths
"""

import logging
import threading
from collections.abc import Sequence

import numpy as np
from fastapi.concurrency import run_in_threadpool
from langchain_core.embeddings import Embeddings
from langchain_huggingface import HuggingFaceEmbeddings

from kb_rag.configs.embedding import EmbeddingSettings
from kb_rag.core.exceptions import DimensionMismatchError, EmbeddingError, ValidationError

logger = logging.getLogger(__name__)


def l2_normalize(vector: Sequence[float]) -> list[float]:
    """Scale a vector to unit length (zero vectors are returned unchanged)."""
    array = np.asarray(vector, dtype=np.float64)
    norm = np.linalg.norm(array)
    if norm == 0.0:
        return array.tolist()
    return (array / norm).tolist()


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity between two vectors.

    Args:
        a: First vector
        b: Second vector

    Returns:
        float: Similarity in [-1, 1]; 0.0 when either vector has zero norm

    Raises:
        DimensionMismatchError: When the vectors differ in length
    """
    if len(a) != len(b):
        raise DimensionMismatchError(len(a), len(b))

    left = np.asarray(a, dtype=np.float64)
    right = np.asarray(b, dtype=np.float64)
    denominator = np.linalg.norm(left) * np.linalg.norm(right)
    if denominator == 0.0:
        return 0.0
    return float(np.dot(left, right) / denominator)


class Embedder:
    """
    Sentence embedding generator with a lazily loaded model.

    The model is built on first use and shared by all callers. Construction
    is guarded by a lock so concurrent first requests load it only once.
    Inference runs in the threadpool to keep the event loop free.
    """

    def __init__(self, settings: EmbeddingSettings | None = None) -> None:
        """
        Initialize embedder configuration (the model itself loads lazily).

        Args:
            settings: Model name, output dimension, device and batch size
        """
        self._settings = settings or EmbeddingSettings()
        self._model: Embeddings | None = None
        self._lock = threading.Lock()

    @property
    def dimension(self) -> int:
        """Configured output dimension."""
        return self._settings.dimension

    @property
    def is_loaded(self) -> bool:
        return self._model is not None

    def get_model(self) -> Embeddings:
        """
        Return the shared model, loading it on first call.

        Returns:
            Embeddings: LangChain embeddings instance

        Raises:
            EmbeddingError: When the model cannot be loaded
        """
        if self._model is None:
            with self._lock:
                if self._model is None:
                    logger.info(
                        f"{__name__}:get_model - Loading embedding model "
                        f"{self._settings.model_name} on {self._settings.device}"
                    )
                    try:
                        self._model = HuggingFaceEmbeddings(
                            model_name=self._settings.model_name,
                            model_kwargs={"device": self._settings.device},
                            encode_kwargs={"normalize_embeddings": True},
                        )
                    except Exception as e:
                        raise EmbeddingError(
                            f"Failed to load embedding model: {e}",
                            service="embedding",
                            operation="load_model",
                        ) from e
        return self._model

    def _embed_sync(self, texts: list[str]) -> list[list[float]]:
        """Embed texts on the calling thread and normalize the output."""
        model = self.get_model()
        try:
            raw_vectors = model.embed_documents(texts)
        except Exception as e:
            raise EmbeddingError(
                f"Failed to generate embeddings: {e}",
                service="embedding",
                operation="embed",
                details={"text_count": len(texts)},
            ) from e

        vectors = [l2_normalize(vector) for vector in raw_vectors]
        for vector in vectors:
            if len(vector) != self._settings.dimension:
                raise EmbeddingError(
                    "Embedding dimension does not match configuration",
                    service="embedding",
                    operation="embed",
                    details={"expected": self._settings.dimension, "actual": len(vector)},
                )
        return vectors

    async def embed(self, text: str) -> list[float]:
        """
        Generate embedding for a single text.

        Args:
            text: Text to embed

        Returns:
            list[float]: Unit-length embedding vector

        Raises:
            ValidationError: When text is empty
            EmbeddingError: When the model fails
        """
        if not text or not text.strip():
            raise ValidationError("Text to embed is required", field="text")

        vectors = await run_in_threadpool(self._embed_sync, [text])
        return vectors[0]

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """
        Generate embeddings for many texts, preserving order.

        Texts are processed sequentially in slices of the configured batch
        size to bound memory.

        Args:
            texts: Texts to embed

        Returns:
            list[list[float]]: One unit-length vector per input text
        """
        vectors: list[list[float]] = []
        batch_size = self._settings.batch_size
        for start in range(0, len(texts), batch_size):
            batch = texts[start : start + batch_size]
            vectors.extend(await run_in_threadpool(self._embed_sync, batch))

        logger.info(f"{__name__}:embed_batch - Generated {len(vectors)} embeddings")
        return vectors
