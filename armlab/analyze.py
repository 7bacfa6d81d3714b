"""Static analysis of ARM machine code: field decoding and instruction mix."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

END_MARKER = 0xE2800000  # add r0, r0, #0

BX = "bx"
MULTIPLY = "multiply"
BRANCH = "branch"
MEMORY = "memory"
DATA_PROCESSING = "data_processing"

_UINT32_MASK = 0xFFFFFFFF

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstructionFields:
    """Fields of a data-processing instruction word."""

    cond: int
    dp_op: int
    i_bit: int
    opcode: int
    rn: int
    rd: int
    rm: int
    imm: int

    def __str__(self) -> str:
        return "\n".join(
            [
                f"cond = {self.cond:X}",
                f"dp_op = {self.dp_op:X}",
                f"i_bit = {self.i_bit:X}",
                f"opcode = {self.opcode:X}",
                f"rn = {self.rn}",
                f"rd = {self.rd}",
                f"rm = {self.rm}",
                f"imm = {self.imm}",
            ]
        )


def decode_fields(iw: int) -> InstructionFields:
    """Split an instruction word into its data-processing fields."""
    iw &= _UINT32_MASK
    return InstructionFields(
        cond=(iw >> 28) & 0b1111,
        dp_op=(iw >> 26) & 0b11,
        i_bit=(iw >> 25) & 0b1,
        opcode=(iw >> 21) & 0b1111,
        rn=(iw >> 16) & 0b1111,
        rd=(iw >> 12) & 0b1111,
        rm=iw & 0b1111,
        imm=iw & 0b11111111,
    )


def classify(iw: int) -> str | None:
    """Name the class of an instruction word, or None if unrecognised."""
    iw &= _UINT32_MASK
    bits27_26 = (iw >> 26) & 0b11
    bits27_25 = (iw >> 25) & 0b111
    bits27_22 = (iw >> 22) & 0b111111
    bits7_4 = (iw >> 4) & 0b1111
    bits27_4 = (iw >> 4) & 0xFFFFFF

    if bits27_4 == 0x12FFF1:
        return BX
    if bits27_22 == 0b000000 and bits7_4 == 0b1001:
        return MULTIPLY
    if bits27_25 == 0b101:
        return BRANCH
    if bits27_26 == 0b01:
        return MEMORY
    if bits27_26 == 0b00:
        return DATA_PROCESSING
    return None


@dataclass
class Analysis:
    """Counts of each instruction class in a stretch of code."""

    inst_count: int = 0
    dp_count: int = 0
    mem_count: int = 0
    branch_count: int = 0
    mul_count: int = 0
    bx_count: int = 0

    def _record(self, kind: str) -> None:
        if kind == BX:
            self.bx_count += 1
        elif kind == MULTIPLY:
            self.mul_count += 1
        elif kind == BRANCH:
            self.branch_count += 1
        elif kind == MEMORY:
            self.mem_count += 1
        elif kind == DATA_PROCESSING:
            self.dp_count += 1
        else:
            raise ValueError(f"unknown instruction class: {kind!r}")
        self.inst_count += 1

    def report(self, name: str) -> str:
        """Render the counts under a heading naming the code analysed."""
        return "\n".join(
            [
                f"[Instruction Analysis: {name}]",
                f"Data Processing    : {self.dp_count}",
                f"Memory             : {self.mem_count}",
                f"Branch             : {self.branch_count}",
                f"Multiply           : {self.mul_count}",
                f"BX                 : {self.bx_count}",
                "--------------------",
                f"Total              : {self.inst_count}",
            ]
        )


def analyze_code(words: Iterable[int]) -> Analysis:
    """Count instruction classes up to the end marker (or end of input)."""
    analysis = Analysis()
    for iw in words:
        iw &= _UINT32_MASK
        if iw == END_MARKER:
            break
        kind = classify(iw)
        if kind is None:
            logger.warning("analyze: unrecogized instruction - ignoring")
            continue
        analysis._record(kind)
    return analysis