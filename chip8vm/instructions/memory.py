"""CHIP-8 memory and register operations."""

import jax
import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction


def execute_set(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """6XKK - Set VX = KK."""
    return state.replace(V=state.V.at[instruction.x].set(instruction.kk))


def execute_add(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """7XKK - Add KK to VX, wrapping. VF is not affected."""
    result = (int(state.V[instruction.x]) + instruction.kk) & 0xFF
    return state.replace(V=state.V.at[instruction.x].set(result))


def execute_set_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return state.replace(I=jnp.astype(instruction.nnn, jnp.uint16))


def execute_random(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """CXKK - Set VX = random & KK."""
    key, subkey = jax.random.split(state.rng)
    random_value = jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32)
    result = jnp.astype(random_value, jnp.uint8) & instruction.kk
    return state.replace(V=state.V.at[instruction.x].set(result), rng=key)
