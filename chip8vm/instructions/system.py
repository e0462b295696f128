"""CHIP-8 system instructions (0x0xxx)."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.errors import InvalidOpcode
from chip8vm.stack import pop


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=jnp.zeros_like(state.display))


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return state.replace(stack=stack, pc=address)


SYSTEM_INSTRUCTIONS = {
    0x00E0: execute_clear_screen,
    0x00EE: execute_return,
}


def execute_system_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch system instructions.

    0NNN machine-code calls are not supported and fail like any other
    unknown word.
    """
    handler = SYSTEM_INSTRUCTIONS.get(instruction.raw)
    if handler is None:
        raise InvalidOpcode(instruction.raw)
    return handler(state, instruction)
