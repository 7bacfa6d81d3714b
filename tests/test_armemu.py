import pytest

from armlab.armemu import (
    LR,
    PC,
    SP,
    STACK_BASE,
    STACK_SIZE,
    ArmState,
    InvalidInstruction,
    Memory,
    emulate,
    is_add,
    is_bx,
)
from armlab.cache import DirectMappedCache

ADD_R0_R0_R1 = 0xE0800001
ADD_R0_R0_IMM5 = 0xE2800005
ADD_PC_LR_IMM0 = 0xE28EF000
BX_LR = 0xE12FFF1E
MOV_R0_IMM1 = 0xE3A00001
ENTRY = 0x1000


def load(words, entry=ENTRY):
    memory = Memory()
    memory.load_words(entry, words)
    return memory


def test_memory_round_trip():
    memory = Memory()
    end = memory.load_words(0x200, [1, 2, 3])
    assert end == 0x200 + 4 * 3
    assert [memory.read_word(0x200 + 4 * i) for i in range(3)] == [1, 2, 3]
    assert 0x204 in memory
    assert 0x20C not in memory


def test_memory_masks_words_to_32_bits():
    memory = Memory()
    memory.load_words(0, [-1])
    assert memory.read_word(0) == 0xFFFFFFFF


def test_memory_unaligned_access_rejected():
    memory = Memory()
    with pytest.raises(ValueError):
        memory.load_words(2, [1])
    with pytest.raises(ValueError):
        memory.read_word(1)


def test_memory_unmapped_read_raises():
    with pytest.raises(LookupError):
        Memory().read_word(0x400)


def test_instruction_recognisers():
    assert is_bx(BX_LR)
    assert not is_bx(ADD_R0_R0_R1)
    assert is_add(ADD_R0_R0_R1)
    assert is_add(ADD_R0_R0_IMM5)
    assert not is_add(BX_LR)
    assert not is_add(MOV_R0_IMM1)


def test_initial_state():
    state = ArmState(load([BX_LR]), ENTRY, (1, 2), None)
    assert state.regs[PC] == ENTRY
    assert state.regs[LR] == 0
    assert state.regs[SP] == STACK_BASE + STACK_SIZE
    assert state.regs[:4] == [1, 2, 0, 0]
    assert state.cpsr == 0
    assert len(state.stack) == STACK_SIZE
    assert not state.cache_on


def test_too_many_arguments_rejected():
    with pytest.raises(ValueError):
        ArmState(load([BX_LR]), ENTRY, (1, 2, 3, 4, 5), None)


@pytest.mark.parametrize("a, b", [(1, 2), (-1, 100), (0, 0), (12345, 678)])
def test_add_register_program(a, b):
    memory = load([ADD_R0_R0_R1, BX_LR])
    assert emulate(memory, ENTRY, a, b) == a + b


@pytest.mark.parametrize("a", [0, 7, 1000])
def test_add_immediate_program(a):
    memory = load([ADD_R0_R0_IMM5, BX_LR])
    assert emulate(memory, ENTRY, a) == a + 5


def test_result_is_signed():
    memory = load([ADD_R0_R0_R1, BX_LR])
    assert emulate(memory, ENTRY, 0xFFFFFFFF, 0) == -1


def test_add_into_pc_returns_without_increment():
    memory = load([ADD_R0_R0_R1, ADD_PC_LR_IMM0])
    assert emulate(memory, ENTRY, 20, 22) == 20 + 22


def test_step_advances_pc_by_one_word():
    state = ArmState(load([ADD_R0_R0_R1, BX_LR]), ENTRY, (3, 4), None)
    state.step()
    assert state.regs[PC] == ENTRY + 4
    assert state.regs[0] == 3 + 4
    state.step()
    assert state.regs[PC] == 0


def test_invalid_instruction_raises():
    state = ArmState(load([MOV_R0_IMM1, BX_LR]), ENTRY, (), None)
    with pytest.raises(InvalidInstruction) as info:
        state.run()
    assert info.value.iw == MOV_R0_IMM1
    assert info.value.pc == ENTRY


def test_running_into_unloaded_memory_raises():
    with pytest.raises(LookupError):
        emulate(load([ADD_R0_R0_R1]), ENTRY, 1, 1)


def test_run_through_direct_mapped_cache():
    program = [ADD_R0_R0_R1, BX_LR]
    cache = DirectMappedCache(8)
    state = ArmState(load(program), ENTRY, (5, 6), cache)
    assert state.cache_on
    assert state.run() == 5 + 6
    assert cache.num_reqs == len(program)
    assert cache.num_cold_misses == len(program)
    assert cache.num_hits == 0