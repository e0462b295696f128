"""CHIP-8 instruction decoding."""

from chex import dataclass


@dataclass(frozen=True)
class DecodedInstruction:
    """Operand fields of a 16-bit instruction word."""
    raw: int
    opcode: int  # Bits 12-15, instruction family
    x: int       # Bits 8-11, register VX
    y: int       # Bits 4-7, register VY
    n: int       # Bits 0-3, 4-bit immediate / sub-opcode
    kk: int      # Low byte, 8-bit immediate
    nnn: int     # Low 12 bits, address


def decode(word: int) -> DecodedInstruction:
    """Split an instruction word into its fields."""
    word = int(word) & 0xFFFF
    return DecodedInstruction(
        raw=word,
        opcode=(word & 0xF000) >> 12,
        x=(word & 0x0F00) >> 8,
        y=(word & 0x00F0) >> 4,
        n=word & 0x000F,
        kk=word & 0x00FF,
        nnn=word & 0x0FFF,
    )
