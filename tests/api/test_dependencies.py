"""
Test suite for the service cache.

System role: Verification of DI wiring and shared instances
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock, patch

from kb_rag.api.deps.dependencies import ServiceCache
from kb_rag.configs import Settings


def make_cache() -> ServiceCache:
    return ServiceCache(Settings())


class TestServiceCache:
    def test_services_share_collaborators(self) -> None:
        cache = make_cache()

        assert cache.retrieval_service.embedder is cache.embedder
        assert cache.ingestion_service.embedder is cache.embedder
        assert cache.retrieval_service.index_client is cache.index_client
        assert cache.ingestion_service.index_client is cache.index_client
        assert cache.conversation_service.retrieval_service is cache.retrieval_service

    def test_instances_are_cached(self) -> None:
        cache = make_cache()

        assert cache.conversation_service is cache.conversation_service
        assert cache.chunker is cache.chunker

    def test_index_dimension_follows_embedding_settings(self) -> None:
        cache = make_cache()

        assert cache.index_client.dimension == cache.settings.embedding.dimension

    def test_clear_rebuilds_instances(self) -> None:
        cache = make_cache()
        first = cache.index_client

        cache.clear()

        assert cache.index_client is not first

    def test_embedding_model_not_loaded_by_wiring(self) -> None:
        cache = make_cache()
        _ = cache.conversation_service

        assert cache.embedder.is_loaded is False

    def test_concurrent_first_access_builds_once(self) -> None:
        # Arrange
        cache = make_cache()
        workers = 8
        barrier = threading.Barrier(workers)
        built = []

        def slow_embedder(settings):
            built.append(settings)
            time.sleep(0.05)
            return MagicMock(name="embedder")

        def access():
            barrier.wait()
            return cache.embedder

        # Act
        with patch("kb_rag.api.deps.dependencies.Embedder", side_effect=slow_embedder):
            with ThreadPoolExecutor(max_workers=workers) as pool:
                instances = list(pool.map(lambda _: access(), range(workers)))

        # Assert
        assert len(built) == 1
        assert all(instance is instances[0] for instance in instances)
