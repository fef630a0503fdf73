"""
Snapshot Publisher - Ordered, non-blocking hand-off to display sinks.

The simulation thread publishes epoch snapshots and genotype changes; a
single background worker delivers them to every subscribed sink in the
order they were published. Publishing never waits for a sink.
"""

import queue
import threading
from typing import Callable, List, Optional

from ..events.console_log import console_log
from ..events.messages import EpochSnapshot, GenotypeChanged


Sink = Callable[[object], None]


class SnapshotPublisher:
    """
    Single-producer FIFO queue drained by one daemon worker.

    The worker starts with the publisher and runs until shutdown().
    """

    def __init__(self, synchronous: bool = False):
        """
        Args:
            synchronous: Deliver inline on the publishing thread, no worker.
        """
        self.sinks: List[Sink] = []
        self.synchronous = synchronous
        self.queue: queue.Queue = queue.Queue()
        self.delivered = 0
        self.failures = 0
        self.closed = False
        self.worker_thread: Optional[threading.Thread] = None

        if not synchronous:
            self.worker_thread = threading.Thread(
                target=self._worker, name='evostats-publisher', daemon=True
            )
            self.worker_thread.start()

    def subscribe(self, sink: Sink):
        self.sinks.append(sink)

    def publish(self, message):
        """Queue a message for delivery; returns immediately."""
        if self.closed:
            console_log().log(f"[Publisher] Dropped {type(message).__name__} after shutdown")
            return
        if self.synchronous:
            self._deliver(message)
        else:
            self.queue.put_nowait(message)

    def _worker(self):
        """Background worker that delivers messages in publish order."""
        while True:
            message = self.queue.get()
            try:
                if message is None:  # Sentinel to stop thread
                    break
                self._deliver(message)
            finally:
                self.queue.task_done()

    def _deliver(self, message):
        for sink in list(self.sinks):
            try:
                sink(message)
            except Exception as e:
                self.failures += 1
                console_log().log(f"[Publisher] Sink {sink!r} failed: {e}", force=True)
        self.delivered += 1

    def flush(self):
        """Block until everything published so far has been delivered."""
        if not self.synchronous and not self.closed:
            self.queue.join()

    def shutdown(self, timeout: float = 5.0):
        """Deliver what is queued, then stop the worker."""
        if self.closed:
            return
        self.closed = True
        if self.worker_thread is not None:
            self.queue.put(None)
            self.worker_thread.join(timeout=timeout)
            console_log().log(f"[Publisher] Stopped after {self.delivered} deliveries")
