"""CHIP-8 virtual machine package."""

from chip8vm.state import EmulatorState, create_state, reset_state
from chip8vm.emulator import execute, fetch, step, tick_timers, press_key, load_program, load_rom
from chip8vm.decode import DecodedInstruction, decode
from chip8vm.disassemble import disassemble, disassemble_program
from chip8vm.engine import Chip8
from chip8vm.errors import Chip8Error, InvalidOpcode, StackUnderflow, StackOverflow, MemoryOutOfBounds
from chip8vm.constants import *
from chip8vm.rendering import chip8_display_to_rgb, create_color_scheme, display_to_ascii, save_frame

__all__ = [
    "Chip8",
    "EmulatorState",
    "create_state",
    "reset_state",
    "fetch",
    "execute",
    "step",
    "tick_timers",
    "press_key",
    "load_program",
    "load_rom",
    "DecodedInstruction",
    "decode",
    "disassemble",
    "disassemble_program",
    "Chip8Error",
    "InvalidOpcode",
    "StackUnderflow",
    "StackOverflow",
    "MemoryOutOfBounds",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "DEFAULT_STACK_SIZE",
    "chip8_display_to_rgb",
    "create_color_scheme",
    "display_to_ascii",
    "save_frame",
]
