"""Bounds-checked access to CHIP-8 memory."""

import jax.numpy as jnp

from chip8vm.constants import MEMORY_SIZE
from chip8vm.errors import MemoryOutOfBounds


def check_range(address, length: int) -> int:
    """Return ``address`` as int, raising if ``length`` bytes from it leave memory."""
    address = int(address)
    if address < 0 or address + length > MEMORY_SIZE:
        raise MemoryOutOfBounds(address, length)
    return address


def read_bytes(memory: jnp.ndarray, address, length: int) -> jnp.ndarray:
    """Read ``length`` bytes starting at ``address``."""
    start = check_range(address, length)
    return memory[start:start + length]


def write_bytes(memory: jnp.ndarray, address, values) -> jnp.ndarray:
    """Return ``memory`` with ``values`` written starting at ``address``."""
    values = jnp.asarray(values, dtype=jnp.uint8)
    start = check_range(address, values.shape[0])
    return memory.at[start:start + values.shape[0]].set(values)
