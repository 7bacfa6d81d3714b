import pytest

from armlab.cache import (
    CACHE_MAX_SLOTS,
    CacheSlot,
    DirectMappedCache,
    PassThroughCache,
)


class FakeMemory:
    def __init__(self, words=None):
        self.words = dict(words or {})
        self.reads = 0

    def read_word(self, addr):
        self.reads += 1
        return self.words[addr]


def test_index_bits_for_eight_slots():
    cache = DirectMappedCache(8)
    assert cache.index_mask == 7
    assert cache.num_index_bits == 3


def test_new_cache_has_empty_slots():
    cache = DirectMappedCache(4)
    assert cache.slots == [CacheSlot() for _ in range(4)]
    assert cache.slots_used() == 0


def test_cold_miss_then_hit():
    memory = FakeMemory({0x1000: 0xDEADBEEF})
    cache = DirectMappedCache(8)
    assert cache.fetch(memory, 0x1000) == 0xDEADBEEF
    assert cache.num_cold_misses == 1
    assert cache.num_hits == 0
    assert cache.fetch(memory, 0x1000) == 0xDEADBEEF
    assert cache.num_hits == 1
    assert cache.num_reqs == 2
    assert cache.num_misses == 1
    assert cache.num_hot_misses == 0


def test_conflicting_addresses_cause_hot_miss():
    size = 4
    first = 0x2000
    second = first + 4 * size
    memory = FakeMemory({first: 11, second: 22})
    cache = DirectMappedCache(size)
    assert cache.fetch(memory, first) == 11
    assert cache.fetch(memory, second) == 22
    assert cache.num_hot_misses == 1
    assert cache.num_cold_misses == 1
    assert cache.slots_used() == 1
    assert cache.fetch(memory, first) == 11
    assert cache.num_hot_misses == 2


def test_distinct_slots_are_all_used():
    size = 8
    memory = FakeMemory({0x100 + 4 * i: i for i in range(size)})
    cache = DirectMappedCache(size)
    values = [cache.fetch(memory, 0x100 + 4 * i) for i in range(size)]
    assert values == list(range(size))
    assert cache.slots_used() == size
    assert cache.num_cold_misses == size


def test_hit_returns_cached_word_even_if_memory_changed():
    memory = FakeMemory({0x40: 1})
    cache = DirectMappedCache(2)
    cache.fetch(memory, 0x40)
    memory.words[0x40] = 2
    assert cache.fetch(memory, 0x40) == 1
    assert cache.num_hits == 1


def test_zero_size_cache_always_misses_without_requests():
    memory = FakeMemory({0x10: 5})
    cache = DirectMappedCache(0)
    assert cache.fetch(memory, 0x10) == 5
    assert cache.fetch(memory, 0x10) == 5
    assert cache.num_misses == 2
    assert cache.num_reqs == 0


@pytest.mark.parametrize("size", [-1, CACHE_MAX_SLOTS + 1])
def test_invalid_size_rejected(size):
    with pytest.raises(ValueError):
        DirectMappedCache(size)


def test_maximum_size_accepted():
    cache = DirectMappedCache(CACHE_MAX_SLOTS)
    assert len(cache.slots) == CACHE_MAX_SLOTS


def test_report_after_one_miss_and_one_hit():
    memory = FakeMemory({0x1000: 7})
    cache = DirectMappedCache(8)
    cache.fetch(memory, 0x1000)
    cache.fetch(memory, 0x1000)
    text = cache.report()
    lines = text.splitlines()
    assert lines[0] == "===Cache Analysis==="
    assert f"Number of requests       = {cache.num_reqs}" in lines
    assert "Hit Ratio                = 50.00%" in lines
    assert "Approximat time (ns)     = 103" in lines
    assert cache.hit_ratio + cache.miss_ratio == pytest.approx(100.0)


def test_report_with_no_requests_shows_nan():
    cache = DirectMappedCache(4)
    assert "Hit Ratio                = nan%" in cache.report().splitlines()


def test_pass_through_cache_reads_memory_every_time():
    memory = FakeMemory({0x8: 99})
    cache = PassThroughCache()
    assert cache.fetch(memory, 0x8) == 99
    assert cache.fetch(memory, 0x8) == 99
    assert memory.reads == 2