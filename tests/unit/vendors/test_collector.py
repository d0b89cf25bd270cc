"""Tests for the resolved-repository collector."""
from __future__ import annotations

import threading

import pytest


class TestRepoEventCollector:
    def test_drain_returns_arrival_order_with_duplicates(self) -> None:
        """drain returns events as they arrived, duplicates included."""
        from depvendor.core.fetch import RepositoryName
        from depvendor.core.vendors import RepoEventCollector

        collector = RepoEventCollector()
        for name in ("B", "A", "B"):
            collector.on_repo_resolved(RepositoryName(name))

        assert collector.drain() == (
            RepositoryName("B"),
            RepositoryName("A"),
            RepositoryName("B"),
        )

    def test_drain_twice_raises(self) -> None:
        """A collector can be drained only once."""
        from depvendor.core.vendors import RepoEventCollector, VendorError

        collector = RepoEventCollector()
        assert collector.drain() == ()

        with pytest.raises(VendorError):
            collector.drain()

    def test_event_after_drain_raises(self) -> None:
        """Events arriving after the drain are rejected."""
        from depvendor.core.fetch import RepositoryName
        from depvendor.core.vendors import RepoEventCollector, VendorError

        collector = RepoEventCollector()
        collector.drain()

        with pytest.raises(VendorError):
            collector.on_repo_resolved(RepositoryName("A"))

    def test_concurrent_events_are_all_recorded(self) -> None:
        """Events from many threads are all kept, each thread's in order."""
        from depvendor.core.fetch import RepositoryName
        from depvendor.core.vendors import RepoEventCollector

        collector = RepoEventCollector()

        def report(worker: int) -> None:
            for i in range(200):
                collector.on_repo_resolved(RepositoryName(f"w{worker}-{i}"))

        threads = [threading.Thread(target=report, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(collector) == 1600
        drained = collector.drain()
        assert len(set(drained)) == 1600
        # Per-thread order is preserved.
        worker0 = [r.name for r in drained if r.name.startswith("w0-")]
        assert worker0 == [f"w0-{i}" for i in range(200)]
