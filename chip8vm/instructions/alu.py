"""CHIP-8 ALU operations (8xxx).

Every operation takes the current VX and VY values and returns the new VX
value together with the new VF value, or ``None`` for VF when the
operation leaves the flag register alone.
"""

from typing import Optional

from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction
from chip8vm.constants import FLAG_REGISTER
from chip8vm.errors import InvalidOpcode


def alu_set(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY4 - Add: VX += VY, VF = carry."""
    result = vx + vy
    return result & 0xFF, int(result > 0xFF)


def alu_sub_xy(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY5 - Subtract: VX -= VY, VF = NOT borrow."""
    return (vx - vy) & 0xFF, int(vx >= vy)


def alu_shift_right(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY6 - Shift right: VX >>= 1, VF = old bit 0."""
    return vx >> 1, vx & 1


def alu_sub_yx(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY7 - Subtract: VX = VY - VX, VF = NOT borrow."""
    return (vy - vx) & 0xFF, int(vy >= vx)


def alu_shift_left(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XYE - Shift left: VX <<= 1, VF = old bit 7."""
    return (vx << 1) & 0xFF, (vx & 0x80) >> 7


ALU_OPERATIONS = {
    0x0: alu_set,
    0x1: alu_or,
    0x2: alu_and,
    0x3: alu_xor,
    0x4: alu_add,
    0x5: alu_sub_xy,
    0x6: alu_shift_right,
    0x7: alu_sub_yx,
    0xE: alu_shift_left,
}


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    operation = ALU_OPERATIONS.get(instruction.n)
    if operation is None:
        raise InvalidOpcode(instruction.raw)

    vx = int(state.V[instruction.x])
    vy = int(state.V[instruction.y])
    result, vf = operation(vx, vy)

    # Flag is written last so it wins when X is F
    new_V = state.V.at[instruction.x].set(result)
    if vf is not None:
        new_V = new_V.at[FLAG_REGISTER].set(vf)
    return state.replace(V=new_V)
