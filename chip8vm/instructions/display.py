"""CHIP-8 display operations."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT, FLAG_REGISTER
from chip8vm.bus import read_bytes

# Shift amounts for the 8 pixels of a sprite row, leftmost pixel first
ROW_SHIFTS = jnp.arange(7, -1, -1, dtype=jnp.uint8)
COLUMN_OFFSETS = jnp.arange(8)


def draw_sprite(display: jnp.ndarray, sprite: jnp.ndarray, x: int, y: int) -> tuple[jnp.ndarray, bool]:
    """XOR ``sprite`` rows onto ``display`` anchored at (x, y).

    Every pixel coordinate wraps around the screen edges independently.
    Returns the new display and whether any lit pixel was switched off.
    """
    height = sprite.shape[0]
    if height == 0:
        return display, False

    bits = (sprite[:, None] >> ROW_SHIFTS[None, :]) & 1  # (rows, 8)
    xs = (x + COLUMN_OFFSETS) % SCREEN_WIDTH
    ys = (y + jnp.arange(height)) % SCREEN_HEIGHT
    grid_x, grid_y = jnp.meshgrid(xs, ys, indexing='xy')  # both (rows, 8)

    current = display[grid_x, grid_y]
    collision = bool(jnp.any((current == 1) & (bits == 1)))
    updated = jnp.astype(current ^ jnp.astype(bits, display.dtype), display.dtype)
    return display.at[grid_x, grid_y].set(updated), collision


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw N-row sprite from memory at I to (VX, VY); VF = collision."""
    sprite = read_bytes(state.memory, state.I, instruction.n)
    display, collision = draw_sprite(
        state.display,
        sprite,
        int(state.V[instruction.x]),
        int(state.V[instruction.y]),
    )
    return state.replace(
        display=display,
        V=state.V.at[FLAG_REGISTER].set(int(collision)),
    )
