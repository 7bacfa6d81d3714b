"""Instruction caches used by the ARM emulator.

A cache sits between the emulator and memory.  The direct-mapped cache
keeps one 32-bit word per slot and counts hits and misses, telling
apart cold misses (the slot was empty) from hot misses (the slot held
a word with another tag).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

CACHE_MAX_SLOTS = 2048
HIT_TIME_NS = 3
MISS_TIME_NS = 100

_UINT32_MASK = 0xFFFFFFFF

logger = logging.getLogger(__name__)


class WordSource(Protocol):
    """Anything words can be read from by address."""

    def read_word(self, addr: int) -> int:
        ...


@dataclass
class CacheSlot:
    """One cache slot holding a single word."""

    valid: bool = False
    tag: int = 0
    data: int = 0
    timestamp: int = 0


def _percent(part: int, whole: int) -> float:
    if whole == 0:
        return float("nan")
    return part / whole * 100.0


class DirectMappedCache:
    """A direct-mapped cache of ``size`` one-word slots."""

    def __init__(self, size: int) -> None:
        if not 0 <= size <= CACHE_MAX_SLOTS:
            raise ValueError(
                f"cache size must be between 0 and {CACHE_MAX_SLOTS}, got {size}"
            )
        self.num_slots = size
        self.index_mask = (size - 1) & _UINT32_MASK
        logger.debug("  cache index mask: %d", self.index_mask)
        bits = 0
        while (self.index_mask >> bits) & 1:
            bits += 1
        self.num_index_bits = bits
        logger.debug("  cache num_index_bits: %d", self.num_index_bits)
        self.slots = [CacheSlot() for _ in range(size)]
        self.num_reqs = 0
        self.num_hits = 0
        self.num_misses = 0
        self.num_hot_misses = 0
        self.num_cold_misses = 0

    def fetch(self, memory: WordSource, addr: int) -> int:
        """Return the word at ``addr``, going to ``memory`` on a miss."""
        if self.num_slots == 0:
            self.num_misses += 1
            return memory.read_word(addr)

        self.num_reqs += 1
        word_addr = (addr & _UINT32_MASK) >> 2
        tag = word_addr >> self.num_index_bits
        index = word_addr & self.index_mask
        slot = self.slots[index]

        if slot.valid:
            if slot.tag == tag:
                logger.debug(
                    "  cache tag hit for slot %d tag %X addr %X", index, tag, addr
                )
                current = memory.read_word(addr)
                if slot.data != current:
                    logger.warning(
                        "*** cache slot data doesn't match: %X != %X",
                        slot.data,
                        current,
                    )
                self.num_hits += 1
            else:
                logger.debug(
                    "  cache tag (%X) miss for slot %d tag %X addr %X",
                    slot.tag,
                    index,
                    tag,
                    addr,
                )
                self.num_misses += 1
                self.num_hot_misses += 1
                slot.data = memory.read_word(addr)
                slot.tag = tag
        else:
            logger.debug(
                "  cache slot %d not valid for tag %X addr %X", index, tag, addr
            )
            self.num_misses += 1
            self.num_cold_misses += 1
            slot.data = memory.read_word(addr)
            slot.tag = tag
            slot.valid = True

        return slot.data

    def slots_used(self) -> int:
        """Number of slots that hold a valid word."""
        return sum(1 for slot in self.slots if slot.valid)

    @property
    def hit_ratio(self) -> float:
        """Hits as a percentage of requests."""
        return _percent(self.num_hits, self.num_reqs)

    @property
    def miss_ratio(self) -> float:
        """Misses as a percentage of requests."""
        return _percent(self.num_misses, self.num_reqs)

    @property
    def usage(self) -> float:
        """Valid slots as a percentage of all slots."""
        return _percent(self.slots_used(), self.num_slots)

    @property
    def approximate_time_ns(self) -> int:
        """Rough total fetch time in nanoseconds."""
        return HIT_TIME_NS * self.num_hits + MISS_TIME_NS * self.num_misses

    def report(self) -> str:
        """Render the cache statistics."""
        lines = [
            "===Cache Analysis===",
            f"Number of requests       = {self.num_reqs}",
            f"Number of hits           = {self.num_hits}",
            f"Number of misses         = {self.num_misses}",
            f"Number of misses (cold)  = {self.num_cold_misses}",
            f"Number of misses (hot)   = {self.num_hot_misses}",
            f"Hit Ratio                = {self.hit_ratio:.2f}%",
            f"Miss Ratio               = {self.miss_ratio:.2f}%",
            f"Percent of cache used    = {self.usage:.2f}%",
            f"Approximat time (ns)     = {self.approximate_time_ns}",
        ]
        return "\n".join(lines)


class PassThroughCache:
    """A cache that forwards every fetch straight to memory."""

    def fetch(self, memory: WordSource, addr: int) -> int:
        """Return the word at ``addr`` read from ``memory``."""
        return memory.read_word(addr)