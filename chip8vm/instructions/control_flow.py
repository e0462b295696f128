"""CHIP-8 control flow instructions."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.errors import InvalidOpcode
from chip8vm.stack import push


def _advance(state: EmulatorState) -> EmulatorState:
    return state.replace(pc=jnp.astype(state.pc + 2, jnp.uint16))


def execute_jump(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=jnp.astype(instruction.nnn, jnp.uint16))


def execute_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn, require_zero_n: bool = False):
    """Factory for skip instructions.

    ``require_zero_n`` rejects 5XYn/9XYn words whose low nibble is not 0.
    """
    def skip_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        if require_zero_n and instruction.n != 0:
            raise InvalidOpcode(instruction.raw)
        if condition_fn(state, instruction):
            return _advance(state)
        return state
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == inst.kk
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != inst.kk
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == int(state.V[inst.y]),
    require_zero_n=True,
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != int(state.V[inst.y]),
    require_zero_n=True,
)


def execute_jump_with_offset(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BNNN - Jump to address NNN + V0."""
    jump_address = instruction.nnn + int(state.V[0])
    return state.replace(pc=jnp.astype(jump_address, jnp.uint16))


def _key_pressed(state: EmulatorState, instruction: DecodedInstruction) -> bool:
    return bool(state.keypad[int(state.V[instruction.x]) & 0xF])


execute_skip_if_key_pressed = make_skip_instruction(_key_pressed)

execute_skip_if_key_not_pressed = make_skip_instruction(
    lambda state, inst: not _key_pressed(state, inst)
)

KEY_INSTRUCTIONS = {
    0x9E: execute_skip_if_key_pressed,
    0xA1: execute_skip_if_key_not_pressed,
}


def execute_skip_if_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """EX9E/EXA1 - Skip if key VX pressed/not pressed."""
    handler = KEY_INSTRUCTIONS.get(instruction.kk)
    if handler is None:
        raise InvalidOpcode(instruction.raw)
    return handler(state, instruction)
