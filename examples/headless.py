"""
Run a ROM without a window, printing frames as text
"""

import argparse

import jax
from octavm import initialize, load_rom, step, consume_frame, MachineError
from octavm.logging import ConsoleLogger, TraceLogger


def print_frame(frame):
    for row in frame.tolist():
        print("".join("#" if cell else "." for cell in row))
    print()


def run_headless(rom_filename, cycles, seed=0, trace=False):
    logger = ConsoleLogger("headless")
    tracer = TraceLogger() if trace else None

    state = initialize(jax.random.PRNGKey(seed))
    state = load_rom(state, rom_filename, logger=logger)

    for _ in range(cycles):
        try:
            state = step(state, tracer)
        except MachineError as e:
            logger.error(f"Halted at PC=0x{int(state.pc):03X}: {e}")
            break
        state, frame = consume_frame(state)
        if frame is not None:
            print_frame(frame)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("rom")
    parser.add_argument("--cycles", type=int, default=1000)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--trace", action="store_true")
    args = parser.parse_args()
    run_headless(args.rom, args.cycles, args.seed, args.trace)
