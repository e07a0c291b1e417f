import threading

from cfscan.resolution.cache import ResolutionCache


def test_get_missing_returns_none():
    cache = ResolutionCache()
    assert cache.get("example.com") is None
    assert cache.misses == 1
    assert cache.hits == 0


def test_insert_then_get():
    cache = ResolutionCache()
    stored = cache.insert("example.com", ["93.184.216.34"])
    assert stored == ("93.184.216.34",)
    assert cache.get("example.com") == ("93.184.216.34",)
    assert cache.hits == 1
    assert "example.com" in cache
    assert len(cache) == 1


def test_empty_answers_are_cached():
    cache = ResolutionCache()
    cache.insert("nosuchhost.invalid", [])
    assert cache.get("nosuchhost.invalid") == ()


def test_first_write_wins():
    cache = ResolutionCache()
    cache.insert("example.com", ["1.1.1.1"])
    stored = cache.insert("example.com", ["2.2.2.2"])
    assert stored == ("1.1.1.1",)
    assert cache.get("example.com") == ("1.1.1.1",)


def test_entries_are_not_shared_with_callers():
    cache = ResolutionCache()
    addresses = ["1.1.1.1"]
    cache.insert("example.com", addresses)
    addresses.append("2.2.2.2")
    assert cache.get("example.com") == ("1.1.1.1",)


def test_concurrent_inserts_keep_one_entry_per_host():
    cache = ResolutionCache()
    barrier = threading.Barrier(16)
    seen = []
    seen_lock = threading.Lock()

    def worker(n):
        barrier.wait()
        for i in range(200):
            host = f"host{i % 20}.example"
            stored = cache.insert(host, [f"10.0.{n}.{i % 250}"])
            entry = cache.get(host)
            with seen_lock:
                seen.append((host, stored, entry))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(cache) == 20
    final = {f"host{i}.example": cache.get(f"host{i}.example") for i in range(20)}
    for host, stored, entry in seen:
        assert stored == final[host]
        assert entry == final[host]
        assert len(entry) == 1

    stats = cache.stats()
    assert stats['entries'] == 20
    assert stats['hits'] == 16 * 200 + 20
