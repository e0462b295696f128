"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.constants import FONT_START, FONT_GLYPH_SIZE
from chip8vm.errors import InvalidOpcode
from chip8vm.bus import read_bytes, write_bytes


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press, storing the key in VX.

    Only marks the state as waiting; the key arrives later through
    :func:`chip8vm.emulator.press_key`.
    """
    return state.replace(waiting_for_key=True, key_register=instruction.x)


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register. VF is not affected."""
    new_i = (int(state.I) + int(state.V[instruction.x])) & 0xFFFF
    return state.replace(I=jnp.astype(new_i, jnp.uint16))


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for hex digit VX."""
    digit = int(state.V[instruction.x]) & 0xF
    font_address = FONT_START + digit * FONT_GLYPH_SIZE
    return state.replace(I=jnp.astype(font_address, jnp.uint16))


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    digits = [value // 100, (value // 10) % 10, value % 10]
    return state.replace(memory=write_bytes(state.memory, state.I, digits))


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I; I += X + 1."""
    count = instruction.x + 1
    new_memory = write_bytes(state.memory, state.I, state.V[:count])
    return state.replace(memory=new_memory, I=jnp.astype(int(state.I) + count, jnp.uint16))


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I; I += X + 1."""
    count = instruction.x + 1
    values = read_bytes(state.memory, state.I, count)
    new_V = state.V.at[:count].set(values)
    return state.replace(V=new_V, I=jnp.astype(int(state.I) + count, jnp.uint16))


MISC_INSTRUCTIONS = {
    0x07: execute_get_delay_timer,
    0x0A: execute_wait_for_key,
    0x15: execute_set_delay_timer,
    0x18: execute_set_sound_timer,
    0x1E: execute_add_to_index,
    0x29: execute_font_character,
    0x33: execute_bcd_conversion,
    0x55: execute_store_registers,
    0x65: execute_load_registers,
}


def execute_misc_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch misc instructions on the low byte."""
    handler = MISC_INSTRUCTIONS.get(instruction.kk)
    if handler is None:
        raise InvalidOpcode(instruction.raw)
    return handler(state, instruction)
