"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chip8vm import Chip8, create_state
from chip8vm.logging import ConsoleLogger


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def machine():
    """Provide a seeded engine that only logs critical messages."""
    return Chip8(seed=0, logger=ConsoleLogger(log_level="CRITICAL"))


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def set_registers(state, **values):
    """Helper to set registers by name, e.g. ``set_registers(state, V1=3, VF=1)``."""
    V = state.V
    for name, value in values.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def program(*words):
    """Assemble instruction words into big-endian program bytes."""
    return b"".join(word.to_bytes(2, "big") for word in words)
