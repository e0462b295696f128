"""CHIP-8 emulator state structures."""

from typing import Optional

import jax
import jax.numpy as jnp
from flax.struct import dataclass, field, PyTreeNode

from chip8vm.constants import (
    MEMORY_SIZE, PROGRAM_START, FONT_START, FONT_DATA, SCREEN_WIDTH, SCREEN_HEIGHT,
    NUM_REGISTERS, NUM_KEYS, DEFAULT_STACK_SIZE,
)


@dataclass(frozen=True)
class StackState:
    """Bounded call stack of return addresses."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(DEFAULT_STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0

    @property
    def size(self) -> int:
        """Maximum number of return addresses."""
        return self.data.shape[0]

    @property
    def addresses(self) -> tuple[int, ...]:
        """Pushed return addresses, oldest first."""
        return tuple(int(a) for a in self.data[:self.pointer])


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state."""
    rng: jax.random.PRNGKey
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.astype(PROGRAM_START, jnp.uint16))
    display: jnp.ndarray = field(
        default_factory=lambda: jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.uint8))
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    waiting_for_key: bool = False
    key_register: int = 0


def create_state(
    rng: Optional[jax.random.PRNGKey] = None,
    stack_size: int = DEFAULT_STACK_SIZE,
) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    if stack_size < 1:
        raise ValueError(f"stack_size must be positive, got {stack_size}")
    if rng is None:
        rng = jax.random.PRNGKey(0)

    state = EmulatorState(rng, stack=StackState(data=jnp.zeros(stack_size, dtype=jnp.uint16)))
    font = jnp.array(FONT_DATA, dtype=jnp.uint8)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(font))


def reset_state(state: EmulatorState) -> EmulatorState:
    """Fresh state that keeps the stack depth and random stream of ``state``."""
    return create_state(rng=state.rng, stack_size=state.stack.size)
