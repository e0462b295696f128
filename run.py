"""
Headless CHIP-8 runner: load a ROM, tick it a fixed number of times and
dump the final screen.
"""

import os

os.environ["XLA_PYTHON_CLIENT_PREALLOCATE"] = "false"

import hydra
from hydra.utils import to_absolute_path
from omegaconf import DictConfig, OmegaConf

from chip8vm import Chip8, Chip8Error
from chip8vm.logging import ConsoleLogger, InstructionTracer, build_progress_bar, log_state_summary
from chip8vm.rendering import display_to_ascii, save_frame


def run_ticks(machine: Chip8, ticks: int, on_error: str, progress: bool, logger: ConsoleLogger) -> tuple[int, int]:
    """Tick ``machine`` up to ``ticks`` times.

    Returns ``(executed, skipped)``: ticks that completed, and faulting
    instructions stepped over under ``on_error="skip"``.
    """
    bar = build_progress_bar(ticks) if progress else None
    executed = skipped = 0
    try:
        while executed + skipped < ticks:
            try:
                machine.tick()
            except Chip8Error:
                if on_error != "skip":
                    logger.warning(f"Halting after {executed} ticks")
                    break
                machine.skip_instruction()
                skipped += 1
            else:
                executed += 1
            if bar is not None:
                bar.update(1)
    finally:
        if bar is not None:
            bar.close()
    return executed, skipped


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig) -> None:
    logger = ConsoleLogger(log_level=cfg.log_level)
    logger.info(f"Configuration:\n{OmegaConf.to_yaml(cfg)}")

    tracer = InstructionTracer() if cfg.trace else None
    machine = Chip8(seed=cfg.seed, stack_size=cfg.stack_size, logger=logger, tracer=tracer)
    machine.load_rom(to_absolute_path(cfg.rom))

    executed, skipped = run_ticks(machine, cfg.ticks, cfg.on_error, cfg.progress, logger)
    logger.info(f"Ran {executed} ticks, skipped {skipped} faulting instructions")
    log_state_summary(logger, machine.summary())

    if cfg.ascii:
        print(display_to_ascii(machine.display))
    if cfg.frame_output:
        save_frame(machine.display, to_absolute_path(cfg.frame_output), cfg.scale, cfg.color_scheme)
        logger.info(f"Frame saved: {cfg.frame_output}")


if __name__ == "__main__":
    main()
