import threading

import pytest


class FakeLookup:
    """Stands in for the system resolver; records every query"""

    def __init__(self, answers=None, delay=None):
        self.answers = answers or {}
        self.delay = delay
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, hostname):
        with self._lock:
            self.calls.append(hostname)
        if self.delay is not None:
            self.delay.wait()
        return list(self.answers.get(hostname, []))


@pytest.fixture
def fake_lookup():
    return FakeLookup({
        'example.com': ['93.184.216.34'],
        'cdn.example.net': ['104.16.5.5', '2606:4700::6810:505'],
        'v6only.example.org': ['2001:db8::10'],
    })


@pytest.fixture
def ranges_file(tmp_path):
    path = tmp_path / 'ip.conf'
    path.write_text("104.16.0.0/12\n\n173.245.48.0/20\n", encoding='utf-8')
    return path
