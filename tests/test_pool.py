import threading

import pytest

from cfscan.resolution.pool import WorkerPool


class ListSink:
    def __init__(self):
        self.lines = []
        self.threads = set()

    def __call__(self, line):
        self.threads.add(threading.current_thread().name)
        self.lines.append(line)


def test_every_line_is_emitted_once():
    sink = ListSink()
    pool = WorkerPool(lambda line: f"out:{line}", workers=8, queue_size=4, sink=sink)

    lines = [f"host{i}.example" for i in range(500)]
    emitted = pool.run(lines)

    assert emitted == 500
    assert sorted(sink.lines) == sorted(f"out:{line}" for line in lines)
    assert pool.done
    assert pool.stats() == {'workers': 8, 'submitted': 500, 'emitted': 500, 'failed': 0}


def test_single_output_consumer():
    sink = ListSink()
    WorkerPool(str.upper, workers=16, queue_size=2, sink=sink).run(["a", "b", "c"] * 50)
    assert sink.threads == {"cfscan-output"}


def test_work_is_spread_across_workers():
    seen = set()
    lock = threading.Lock()
    gate = threading.Barrier(4)

    def handler(line):
        with lock:
            seen.add(threading.current_thread().name)
        if line < 4:
            gate.wait(timeout=5)
        return str(line)

    pool = WorkerPool(handler, workers=4, queue_size=10, sink=lambda line: None)
    pool.run(range(4))
    assert len(seen) == 4


def test_handler_errors_become_result_lines(capsys):
    def handler(line):
        if line == "bad":
            raise RuntimeError("boom")
        return line

    sink = ListSink()
    pool = WorkerPool(handler, workers=3, sink=sink)
    assert pool.run(["ok1", "bad", "ok2"]) == 3

    assert sorted(sink.lines) == ["Error processing bad: boom", "ok1", "ok2"]
    assert pool.failed == 1
    assert "[POOL] Warning" in capsys.readouterr().err


def test_empty_input():
    sink = ListSink()
    pool = WorkerPool(str, workers=2, sink=sink)
    assert pool.run([]) == 0
    assert sink.lines == []
    assert pool.done


def test_sink_errors_are_raised_after_draining():
    calls = []

    def sink(line):
        calls.append(line)
        raise BrokenPipeError("stdout closed")

    pool = WorkerPool(str, workers=4, queue_size=1, sink=sink)
    with pytest.raises(BrokenPipeError):
        pool.run([str(i) for i in range(50)])

    assert len(calls) == 1
    assert pool.done


def test_submit_requires_start():
    pool = WorkerPool(str, workers=1)
    with pytest.raises(RuntimeError):
        pool.submit("x")


def test_submit_after_close_fails():
    pool = WorkerPool(str, workers=1, sink=lambda line: None)
    pool.start()
    pool.close()
    with pytest.raises(RuntimeError):
        pool.submit("x")
    assert pool.wait(timeout=5)


def test_cannot_start_twice():
    pool = WorkerPool(str, workers=1, sink=lambda line: None)
    pool.start()
    with pytest.raises(RuntimeError):
        pool.start()
    pool.close()
    pool.wait(timeout=5)


@pytest.mark.parametrize("kwargs", [{"workers": 0}, {"queue_size": 0}])
def test_invalid_sizes(kwargs):
    with pytest.raises(ValueError):
        WorkerPool(str, **kwargs)


def test_manual_lifecycle_waits_for_all_workers():
    release = threading.Event()
    sink = ListSink()

    def handler(line):
        release.wait(timeout=5)
        return line

    pool = WorkerPool(handler, workers=3, sink=sink)
    pool.start()
    for line in ["a", "b", "c"]:
        pool.submit(line)
    pool.close()

    assert not pool.wait(timeout=0.1)
    release.set()
    assert pool.wait(timeout=5)
    assert sorted(sink.lines) == ["a", "b", "c"]
