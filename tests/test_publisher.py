"""
tests/test_publisher.py - Ordered, non-blocking snapshot hand-off.
"""

import threading

from evostats import SnapshotPublisher, EpochSnapshot, GenotypeChanged, StatsChartSeries
from conftest import RecordingSink


def snapshot(epoch):
    return EpochSnapshot(epoch, float(epoch), 0.0, 0.0, 0.0, 0.0)


class TestSynchronous:
    """Inline delivery for headless runs."""

    def test_delivers_immediately(self):
        pub = SnapshotPublisher(synchronous=True)
        sink = RecordingSink()
        pub.subscribe(sink)
        pub.publish(snapshot(1))
        assert sink.messages == [snapshot(1)]
        assert pub.worker_thread is None


class TestWorker:
    """Background delivery."""

    def test_delivers_in_publish_order(self):
        pub = SnapshotPublisher()
        sink = RecordingSink()
        pub.subscribe(sink)
        for epoch in range(200):
            pub.publish(snapshot(epoch))
        pub.flush()
        assert [m.epoch for m in sink.messages] == list(range(200))
        pub.shutdown()

    def test_publish_does_not_wait_for_sink(self):
        release = threading.Event()
        received = []

        def slow_sink(message):
            release.wait(timeout=5.0)
            received.append(message)

        pub = SnapshotPublisher()
        pub.subscribe(slow_sink)
        for epoch in range(3):
            pub.publish(snapshot(epoch))
        assert len(received) < 3
        release.set()
        pub.flush()
        assert [m.epoch for m in received] == [0, 1, 2]
        pub.shutdown()

    def test_failing_sink_does_not_stop_delivery(self):
        def broken(message):
            raise RuntimeError("render failed")

        pub = SnapshotPublisher()
        sink = RecordingSink()
        pub.subscribe(broken)
        pub.subscribe(sink)
        pub.publish(snapshot(1))
        pub.publish(snapshot(2))
        pub.flush()
        assert len(sink.messages) == 2
        assert pub.failures == 2
        pub.shutdown()

    def test_shutdown_drains_then_drops(self):
        pub = SnapshotPublisher()
        sink = RecordingSink()
        pub.subscribe(sink)
        pub.publish(snapshot(1))
        pub.shutdown()
        assert not pub.worker_thread.is_alive()
        assert len(sink.messages) == 1
        pub.publish(snapshot(2))
        assert len(sink.messages) == 1


class TestChartSeries:
    """Chart sink keeps one series per statistic."""

    def test_collects_points_and_genotype(self):
        chart = StatsChartSeries()
        chart(EpochSnapshot(0, 5.0, 7.0, 2.5, 1.0, 3.0))
        chart(EpochSnapshot(1, 6.0, 8.0, 2.0, 1.5, 4.0))
        chart(GenotypeChanged("0123", 4))
        assert chart.points("Animals No.") == [(0, 5.0), (1, 6.0)]
        assert chart.points("Number Of Children") == [(0, 3.0), (1, 4.0)]
        assert chart.latest()["Average Lifespan"] == 1.5
        assert chart.genotype_text == "0123"
        assert chart.colors["Average Energy"] == "#ff006e"

    def test_history_is_bounded(self):
        chart = StatsChartSeries(max_history=3)
        for epoch in range(5):
            chart(snapshot(epoch))
        assert [t for t, _ in chart.points("Animals No.")] == [2, 3, 4]
