"""A small ARM emulator that runs ``add`` and ``bx`` instructions.

Code lives in a word-addressed :class:`Memory`.  An :class:`ArmState`
holds the registers, status register and a private stack, and runs a
function from its entry address until the program counter becomes zero,
which happens when the function returns to the initial link register.
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol, Sequence

NREGS = 16
STACK_SIZE = 4096
STACK_BASE = 0x7FFFF000
SP = 13
LR = 14
PC = 15
MAX_ARGS = 4

_UINT32_MASK = 0xFFFFFFFF

logger = logging.getLogger(__name__)


class _Cache(Protocol):
    def fetch(self, memory: "Memory", addr: int) -> int:
        ...


class Memory:
    """Word-addressed memory holding 32-bit words."""

    def __init__(self) -> None:
        self._words: dict[int, int] = {}

    @staticmethod
    def _check_aligned(addr: int) -> int:
        addr &= _UINT32_MASK
        if addr % 4:
            raise ValueError(f"unaligned word address 0x{addr:08X}")
        return addr

    def load_words(self, addr: int, words: Iterable[int]) -> int:
        """Store ``words`` from ``addr`` on; return the address after them."""
        addr = self._check_aligned(addr)
        for word in words:
            self._words[addr] = word & _UINT32_MASK
            addr = (addr + 4) & _UINT32_MASK
        return addr

    def read_word(self, addr: int) -> int:
        """Return the word stored at ``addr``."""
        addr = self._check_aligned(addr)
        try:
            return self._words[addr]
        except KeyError:
            raise LookupError(f"no word loaded at address 0x{addr:08X}") from None

    def __contains__(self, addr: object) -> bool:
        return isinstance(addr, int) and (addr & _UINT32_MASK) in self._words


class InvalidInstruction(Exception):
    """Raised when the emulator meets an instruction it cannot execute."""

    def __init__(self, iw: int, pc: int) -> None:
        self.iw = iw
        self.pc = pc
        super().__init__(f"invalid instruction 0x{iw:08X} at 0x{pc:08X}")


def is_bx(iw: int) -> bool:
    """True if ``iw`` encodes ``bx``."""
    return (iw >> 4) & 0xFFFFFF == 0x12FFF1


def is_add(iw: int) -> bool:
    """True if ``iw`` encodes a data-processing ``add``."""
    return (iw >> 26) & 0b11 == 0b00 and (iw >> 21) & 0b1111 == 0b0100


def _as_signed(value: int) -> int:
    value &= _UINT32_MASK
    return value - (1 << 32) if value & 0x80000000 else value


class ArmState:
    """The complete machine state of the emulator."""

    def __init__(
        self,
        memory: Memory,
        entry: int,
        args: Sequence[int] = (),
        cache: _Cache | None = None,
    ) -> None:
        args = list(args)
        if len(args) > MAX_ARGS:
            raise ValueError(
                f"at most {MAX_ARGS} register arguments, got {len(args)}"
            )
        self.memory = memory
        self.cache = cache
        self.cpsr = 0
        self.stack = bytearray(STACK_SIZE)
        self.regs = [0] * NREGS
        for index, value in enumerate(args):
            self.regs[index] = value & _UINT32_MASK
        self.regs[PC] = entry & _UINT32_MASK
        self.regs[LR] = 0
        self.regs[SP] = STACK_BASE + STACK_SIZE

    @property
    def cache_on(self) -> bool:
        """True if fetches go through a cache."""
        return self.cache is not None

    def _fetch(self) -> int:
        pc = self.regs[PC]
        if self.cache is not None:
            return self.cache.fetch(self.memory, pc)
        return self.memory.read_word(pc)

    def _bx(self, iw: int) -> None:
        self.regs[PC] = self.regs[iw & 0b1111]

    def _add(self, iw: int) -> None:
        i_bit = (iw >> 25) & 0b1
        rn = (iw >> 16) & 0b1111
        rd = (iw >> 12) & 0b1111
        rm = iw & 0b1111
        imm = iw & 0b11111111

        oper2 = imm if i_bit else self.regs[rm]
        self.regs[rd] = (self.regs[rn] + oper2) & _UINT32_MASK

        if rd != PC:
            self.regs[PC] = (self.regs[PC] + 4) & _UINT32_MASK

    def step(self) -> None:
        """Fetch and execute one instruction."""
        pc = self.regs[PC]
        iw = self._fetch()
        logger.debug("pc = %08X iw = %08X", pc, iw)
        if is_bx(iw):
            self._bx(iw)
        elif is_add(iw):
            self._add(iw)
        else:
            raise InvalidInstruction(iw, pc)

    def run(self) -> int:
        """Run until the program counter is zero; return r0 as a signed int."""
        while self.regs[PC] != 0:
            self.step()
        return _as_signed(self.regs[0])


def emulate(memory: Memory, entry: int, *args: int) -> int:
    """Run the function at ``entry`` with up to four arguments."""
    return ArmState(memory, entry, args, None).run()