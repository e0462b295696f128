"""Host-facing CHIP-8 engine.

:class:`Chip8` owns one :class:`EmulatorState` and is the only thing a host
needs: it ticks the machine, feeds it key events and exposes read-only views
of memory, registers and the framebuffer for rendering. Timing is up to the
host; call :meth:`Chip8.tick` at whatever rate the program expects
(timers assume 60 Hz).
"""

from typing import Optional

import jax
import numpy as np

from chip8vm.constants import DEFAULT_STACK_SIZE, SCREEN_WIDTH, SCREEN_HEIGHT
from chip8vm.errors import Chip8Error
from chip8vm.state import EmulatorState, create_state, reset_state
from chip8vm.emulator import execute, fetch, step, press_key, load_program, load_rom
from chip8vm.logging import ConsoleLogger, InstructionTracer, build_progress_bar


def _read_only(array) -> np.ndarray:
    view = np.asarray(array).view()
    view.flags.writeable = False
    return view


def _fresh_seed() -> int:
    return int(np.random.SeedSequence().entropy % (2 ** 31))


class Chip8:
    """A single CHIP-8 machine.

    Args:
        seed: Seed for the random number source used by CXKK. ``None`` draws
            one from OS entropy; pass an int for reproducible runs.
        stack_size: Maximum call depth before ``StackOverflow``.
        logger: Where errors are reported. Defaults to a WARNING-level
            :class:`ConsoleLogger`.
        tracer: Optional :class:`InstructionTracer` fed every executed word.

    Every entry point that executes code either succeeds or raises a
    :class:`chip8vm.errors.Chip8Error` and leaves the machine exactly as it
    was before the call.
    """

    width = SCREEN_WIDTH
    height = SCREEN_HEIGHT

    def __init__(
        self,
        seed: Optional[int] = None,
        stack_size: int = DEFAULT_STACK_SIZE,
        logger: Optional[ConsoleLogger] = None,
        tracer: Optional[InstructionTracer] = None,
    ):
        if seed is None:
            seed = _fresh_seed()
        self.seed = seed
        self.logger = logger or ConsoleLogger(log_level="WARNING")
        self.tracer = tracer
        self._state = create_state(jax.random.PRNGKey(seed), stack_size=stack_size)

    @property
    def state(self) -> EmulatorState:
        """Current immutable machine state."""
        return self._state

    # Lifecycle

    def reset(self):
        """Reinitialize to the power-on state, keeping stack depth and RNG stream."""
        self._state = reset_state(self._state)

    def load(self, data: bytes):
        """Copy a raw program into memory at 0x200."""
        self._state = load_program(self._state, bytes(data))
        self.logger.debug(f"Loaded {len(data)} bytes at 0x200")

    def load_rom(self, path: str):
        """Load a ROM file into memory at 0x200."""
        self._state = load_rom(self._state, path)
        self.logger.info(f"Loaded ROM {path}")

    # Execution

    def tick(self):
        """Run one fetch/decode/execute cycle, then decrement the timers."""
        state = self._state
        try:
            if self.tracer is not None and not state.waiting_for_key:
                _, word = fetch(state)
                self.tracer.trace(int(state.pc), word)
            self._state = step(state)
        except Chip8Error as error:
            self._report(error, state)
            raise

    def handle_opcode(self, word: int):
        """Execute ``word`` directly, without fetching or ticking timers."""
        state = self._state
        try:
            self._state = execute(state, word)
        except Chip8Error as error:
            self._report(error, state)
            raise

    def skip_instruction(self):
        """Move PC past the current instruction without executing it."""
        self._state = self._state.replace(pc=self._state.pc + 2)

    def run(self, ticks: int, progress: bool = False):
        """Tick ``ticks`` times, optionally showing a progress bar."""
        if not progress:
            for _ in range(ticks):
                self.tick()
            return

        bar = build_progress_bar(ticks)
        try:
            for _ in range(ticks):
                self.tick()
                bar.update(1)
        finally:
            bar.close()

    def _report(self, error: Chip8Error, state: EmulatorState):
        error.pc = int(state.pc)
        self.logger.error(f"{error} at PC 0x{error.pc:03X}")
        if self.tracer is not None:
            self.tracer.dump_history("ERROR")

    # Keypad

    def set_key(self, index: int, pressed: bool):
        """Press or release key ``index`` (0-15)."""
        self._state = press_key(self._state, index, pressed)

    def get_key_state(self, index: int) -> bool:
        if not 0 <= index < len(self._state.keypad):
            raise ValueError(f"Key index must be in 0..15, got {index}")
        return bool(self._state.keypad[index])

    def is_waiting_for_key(self) -> bool:
        return bool(self._state.waiting_for_key)

    # Views

    @property
    def display(self) -> np.ndarray:
        """Read-only framebuffer indexed ``[x, y]``, values 0/1."""
        return _read_only(self._state.display)

    def get_pixel(self, x: int, y: int) -> int:
        if not (0 <= x < SCREEN_WIDTH and 0 <= y < SCREEN_HEIGHT):
            raise ValueError(f"Pixel ({x}, {y}) outside {SCREEN_WIDTH}x{SCREEN_HEIGHT} screen")
        return int(self._state.display[x, y])

    def get_delay_timer(self) -> int:
        return int(self._state.delay_timer)

    def get_sound_timer(self) -> int:
        return int(self._state.sound_timer)

    def get_registers(self) -> np.ndarray:
        """Read-only V0..VF."""
        return _read_only(self._state.V)

    def get_memory(self) -> np.ndarray:
        """Read-only 4 KiB memory."""
        return _read_only(self._state.memory)

    def get_index(self) -> int:
        return int(self._state.I)

    def get_program_counter(self) -> int:
        return int(self._state.pc)

    def get_stack(self) -> tuple[int, ...]:
        """Pushed return addresses, oldest first."""
        return self._state.stack.addresses

    def summary(self) -> dict:
        """Registers and timers as plain ints, for logging."""
        values = {f"V{i:X}": int(v) for i, v in enumerate(self._state.V)}
        values.update(
            I=self.get_index(),
            PC=self.get_program_counter(),
            DT=self.get_delay_timer(),
            ST=self.get_sound_timer(),
        )
        return values
