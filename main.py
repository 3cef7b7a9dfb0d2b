"""
CHIP-8 emulator frontend: pygame window, headless runs and disassembly
"""

import argparse
import sys

from chippy import Chip8Runner, EmulatorConfig, Chip8Error, RomLoadError, disassemble, mnemonic
from chippy.emulator import read_rom
from chippy.logging import get_logger
from chippy.rendering import chip8_display_to_rgb, create_color_scheme, display_to_text

logger = get_logger()


def build_key_map(pygame):
    """Map the host keyboard's 1234/QWER/ASDF/ZXCV block onto the hex keypad."""
    return {
        pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
        pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
        pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
        pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
    }


def window_caption(runner: Chip8Runner) -> str:
    """Window title, flagged while the sound timer is running."""
    return "CHIP-8 [BEEP]" if runner.sound_active else "CHIP-8"


def run_emulator(runner: Chip8Runner, scale=8, color_scheme="classic"):
    """Main emulator loop in a pygame window. ESC quits, F5 resets."""
    import pygame

    pygame.init()
    screen = pygame.display.set_mode((64 * scale, 32 * scale))
    caption = window_caption(runner)
    pygame.display.set_caption(caption)
    key_map = build_key_map(pygame)
    on_color, off_color = create_color_scheme(color_scheme)

    def on_frame(runner: Chip8Runner):
        nonlocal caption
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                runner.stop()
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    runner.stop()
                elif event.key == pygame.K_F5:
                    runner.reset()
                elif event.key in key_map:
                    runner.press_key(key_map[event.key])
            elif event.type == pygame.KEYUP:
                if event.key in key_map:
                    runner.release_key(key_map[event.key])

        frame = chip8_display_to_rgb(runner.state.display, scale, on_color, off_color)
        pygame.surfarray.blit_array(screen, frame.transpose(1, 0, 2))
        if window_caption(runner) != caption:
            caption = window_caption(runner)
            pygame.display.set_caption(caption)
        pygame.display.flip()

    try:
        runner.run(on_frame=on_frame)
    finally:
        pygame.quit()


def print_disassembly(filename: str):
    for address, word, instruction in disassemble(read_rom(filename)):
        text = mnemonic(instruction) if instruction is not None else "DW"
        print(f"0x{address:03X}  {word:04X}  {text}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run a CHIP-8 ROM")
    parser.add_argument("rom", type=str, help="Path to the ROM file")
    parser.add_argument(
        "--instruction_frequency",
        type=int,
        default=700,
        help="CPU speed in instructions per second (default: 700)",
    )
    parser.add_argument(
        "--on_unknown_opcode",
        choices=["halt", "skip"],
        default="halt",
        help="What to do with an unknown opcode (default: halt)",
    )
    parser.add_argument("--seed", type=int, default=0, help="Random seed (default: 0)")
    parser.add_argument("--scale", type=int, default=8, help="Window scale (default: 8)")
    parser.add_argument("--color_scheme", type=str, default="classic", help="Color scheme (default: classic)")
    parser.add_argument("--trace", action="store_true", help="Log every executed instruction")
    parser.add_argument(
        "--headless",
        type=int,
        metavar="CYCLES",
        default=None,
        help="Run CYCLES instructions without a window and print the screen",
    )
    parser.add_argument("--disassemble", action="store_true", help="Print a listing and exit")
    args = parser.parse_args(argv)

    try:
        if args.disassemble:
            print_disassembly(args.rom)
            return 0

        config = EmulatorConfig(
            instruction_frequency=args.instruction_frequency,
            on_unknown_opcode=args.on_unknown_opcode,
            seed=args.seed,
            trace=args.trace,
        )
        get_logger(log_level="DEBUG" if args.trace else "INFO")
        runner = Chip8Runner(config, logger=logger)
        runner.load_rom(args.rom)

        if args.headless is not None:
            executed = runner.run_headless(args.headless, progress=not args.trace)
            print(display_to_text(runner.state.display))
            logger.info(f"Executed {executed} instructions, PC=0x{int(runner.state.pc):03X}")
        else:
            run_emulator(runner, scale=args.scale, color_scheme=args.color_scheme)
    except RomLoadError as e:
        logger.critical(str(e))
        return 1
    except Chip8Error:
        # already logged by the runner
        return 1
    except ValueError as e:
        logger.error(str(e))
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
