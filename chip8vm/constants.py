"""CHIP-8 machine constants."""

MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START

NUM_REGISTERS = 16
FLAG_REGISTER = 0xF
NUM_KEYS = 16

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32

# Real interpreters reserve 12 to 16 levels
DEFAULT_STACK_SIZE = 16

FONT_START = 0x50
FONT_GLYPH_SIZE = 5
FONT_DATA = [
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
]

__all__ = [
    "MEMORY_SIZE",
    "PROGRAM_START",
    "MAX_PROGRAM_SIZE",
    "NUM_REGISTERS",
    "FLAG_REGISTER",
    "NUM_KEYS",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "DEFAULT_STACK_SIZE",
    "FONT_START",
    "FONT_GLYPH_SIZE",
    "FONT_DATA",
]
