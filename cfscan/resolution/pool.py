"""
Worker Pool
Bounded fan-out of input lines over a fixed set of threads, fan-in of the
formatted results into a single output consumer.
"""

import queue
import sys
import threading
from typing import Callable, Iterable, Optional


# Marks the end of a queue
_STOP = object()

DEFAULT_WORKERS = 500
DEFAULT_QUEUE_SIZE = 1000


class WorkerPool:
    """
    Runs `handler` over submitted lines on `workers` threads.

    Lines go through a bounded work queue; every handler result goes through
    a bounded result queue to one consumer thread, which hands it to `sink`
    in completion order. Each submitted line yields exactly one sink call.

    Shutdown:
        close() queues one stop marker per worker. Once every worker has
        exited, a closer thread stops the result queue; the consumer drains
        what is left and sets the done event that wait() blocks on.
    """

    def __init__(
        self,
        handler: Callable[[str], str],
        workers: int = DEFAULT_WORKERS,
        queue_size: int = DEFAULT_QUEUE_SIZE,
        sink: Callable[[str], None] = print
    ):
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        if queue_size < 1:
            raise ValueError(f"queue_size must be at least 1, got {queue_size}")

        self.handler = handler
        self.workers = workers
        self.sink = sink

        self._work_queue = queue.Queue(maxsize=queue_size)
        self._result_queue = queue.Queue(maxsize=queue_size)
        self._threads = []
        self._done = threading.Event()
        self._lock = threading.Lock()
        self._started = False
        self._closed = False
        self._sink_error: Optional[BaseException] = None

        self.submitted = 0
        self.emitted = 0
        self.failed = 0

    def start(self):
        """Spawn the workers, the closer and the output consumer"""
        if self._started:
            raise RuntimeError("Worker pool already started")
        self._started = True

        for i in range(self.workers):
            thread = threading.Thread(target=self._work, name=f"cfscan-worker-{i}", daemon=True)
            thread.start()
            self._threads.append(thread)

        threading.Thread(target=self._close_results, name="cfscan-closer", daemon=True).start()
        threading.Thread(target=self._consume, name="cfscan-output", daemon=True).start()

    def submit(self, line: str):
        """Queue one line, blocking while the work queue is full"""
        if not self._started:
            raise RuntimeError("Worker pool not started")
        if self._closed:
            raise RuntimeError("Worker pool is closed")

        self._work_queue.put(line)
        with self._lock:
            self.submitted += 1

    def close(self):
        """Signal that no more input is coming"""
        if not self._started or self._closed:
            return
        self._closed = True
        for _ in self._threads:
            self._work_queue.put(_STOP)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until every result has been handed to the sink.

        Returns:
            False if the timeout expired first

        Raises:
            The first exception raised by the sink, if any
        """
        if not self._started:
            return True

        finished = self._done.wait(timeout)
        if finished and self._sink_error is not None:
            raise self._sink_error
        return finished

    def run(self, lines: Iterable[str]) -> int:
        """Process every line and wait for completion. Returns lines emitted."""
        self.start()
        try:
            for line in lines:
                self.submit(line)
        finally:
            self.close()
            self.wait()
        return self.emitted

    @property
    def done(self) -> bool:
        return self._done.is_set()

    def stats(self):
        with self._lock:
            return {
                'workers': self.workers,
                'submitted': self.submitted,
                'emitted': self.emitted,
                'failed': self.failed
            }

    def _work(self):
        while True:
            line = self._work_queue.get()
            if line is _STOP:
                break

            try:
                result = self.handler(line)
            except Exception as e:
                with self._lock:
                    self.failed += 1
                print(f"[POOL] Warning: failed to process {line!r}: {e}", file=sys.stderr)
                result = f"Error processing {line}: {e}"

            self._result_queue.put(result)

    def _close_results(self):
        for thread in self._threads:
            thread.join()
        self._result_queue.put(_STOP)

    def _consume(self):
        try:
            while True:
                result = self._result_queue.get()
                if result is _STOP:
                    break

                if self._sink_error is not None:
                    # Keep draining so blocked workers can finish
                    continue

                try:
                    self.sink(result)
                except Exception as e:
                    self._sink_error = e
                    continue

                with self._lock:
                    self.emitted += 1
        finally:
            self._done.set()
