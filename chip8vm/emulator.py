"""Main CHIP-8 emulator execution engine.

Everything here is a pure function from one :class:`EmulatorState` to the
next. Errors propagate as :class:`chip8vm.errors.Chip8Error` subclasses and
never leave a half-updated state behind, since the caller still holds the
state it passed in.
"""

import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import decode
from chip8vm.constants import PROGRAM_START, MAX_PROGRAM_SIZE, NUM_KEYS
from chip8vm.errors import MemoryOutOfBounds
from chip8vm.bus import read_bytes, write_bytes
from chip8vm.instructions.system import execute_system_instruction
from chip8vm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset, execute_skip_if_key
)
from chip8vm.instructions.alu import execute_alu_operation
from chip8vm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8vm.instructions.display import execute_display
from chip8vm.instructions.misc import execute_misc_instruction

INSTRUCTION_FAMILIES = [
    execute_system_instruction,
    execute_jump,
    execute_call,
    execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate,
    execute_skip_if_equal_register,
    execute_set,
    execute_add,
    execute_alu_operation,
    execute_skip_if_not_equal_register,
    execute_set_index,
    execute_jump_with_offset,
    execute_random,
    execute_display,
    execute_skip_if_key,
    execute_misc_instruction,
]


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction."""
    decoded_instruction = decode(instruction)
    return INSTRUCTION_FAMILIES[decoded_instruction.opcode](state, decoded_instruction)


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> int:
    """Pack two bytes into a big-endian word."""
    return (int(high) << 8) | int(low)


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory and advance PC by 2."""
    high, low = read_bytes(state.memory, state.pc, 2)
    instruction = _pack_u16(high, low)
    return state.replace(pc=jnp.astype(int(state.pc) + 2, jnp.uint16)), instruction


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Decrement delay and sound timers by one, stopping at zero."""
    return state.replace(
        delay_timer=jnp.astype(max(int(state.delay_timer) - 1, 0), jnp.uint8),
        sound_timer=jnp.astype(max(int(state.sound_timer) - 1, 0), jnp.uint8),
    )


def step(state: EmulatorState) -> EmulatorState:
    """Run one fetch/execute cycle, then tick the timers.

    While the state waits for a key no instruction is fetched; only the
    timers advance.
    """
    if not state.waiting_for_key:
        state, instruction = fetch(state)
        state = execute(state, instruction)
    return tick_timers(state)


def press_key(state: EmulatorState, key: int, pressed: bool) -> EmulatorState:
    """Update keypad state for ``key``.

    A fresh press while waiting for a key (FX0A) stores the key in the
    waiting register and resumes execution.
    """
    if not 0 <= key < NUM_KEYS:
        raise ValueError(f"Key index must be in 0..{NUM_KEYS - 1}, got {key}")
    was_pressed = bool(state.keypad[key])
    state = state.replace(keypad=state.keypad.at[key].set(pressed))
    if pressed and not was_pressed and state.waiting_for_key:
        state = state.replace(
            V=state.V.at[state.key_register].set(key),
            waiting_for_key=False,
        )
    return state


def load_program(state: EmulatorState, data: bytes) -> EmulatorState:
    """Copy raw program bytes into memory starting at 0x200."""
    if len(data) > MAX_PROGRAM_SIZE:
        raise MemoryOutOfBounds(PROGRAM_START, len(data))
    if not data:
        return state
    program = jnp.array(list(data), dtype=jnp.uint8)
    return state.replace(memory=write_bytes(state.memory, PROGRAM_START, program))


def load_rom(state: EmulatorState, filename: str) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    with open(filename, 'rb') as f:
        rom_data = f.read()
    return load_program(state, rom_data)
