"""Driver loop for running ROMs in real time.

The runner is the single owner of the :class:`EmulatorState`. A background
:class:`TimerDriver` thread only posts ticks onto a queue; the runner drains
them between instruction batches and applies the timer decrements itself, so
the state is never written from two threads. Key presses arriving from other
threads are queued the same way.
"""

import queue
import threading
import time
from typing import Callable, Optional

import jax
import jax.numpy as jnp
from tqdm import tqdm

from chippy import keypad
from chippy.config import EmulatorConfig
from chippy.emulator import fetch, try_step, read_rom, load_rom_bytes
from chippy.errors import Chip8Error
from chippy.instructions import next_pc
from chippy.isa import mnemonic
from chippy.logging import ConsoleLogger, get_logger
from chippy.state import EmulatorState, create_state, tick_timers


class TimerDriver(threading.Thread):
    """Posts one tick per timer period onto a queue until stopped."""

    def __init__(self, ticks: queue.Queue, frequency: int):
        super().__init__(name="chip8-timers", daemon=True)
        self.ticks = ticks
        self.interval = 1.0 / frequency
        self._stopped = threading.Event()

    def run(self):
        next_tick = time.perf_counter()
        while not self._stopped.is_set():
            next_tick += self.interval
            delay = next_tick - time.perf_counter()
            if delay > 0 and self._stopped.wait(delay):
                break
            self.ticks.put(None)

    def stop(self):
        self._stopped.set()


class Chip8Runner:
    """Runs the instruction cycle at a fixed rate alongside 60 Hz timers."""

    def __init__(self, config: EmulatorConfig = EmulatorConfig(), logger: Optional[ConsoleLogger] = None):
        self.config = config.validate()
        self.logger = logger or get_logger()
        self.rom_data = b""
        self.state = self._fresh_state()
        self.instruction_count = 0
        self.halted = False

        self._ticks: queue.Queue = queue.Queue()
        self._key_events: queue.Queue = queue.Queue()
        self._cancelled = threading.Event()
        self._timer_driver: Optional[TimerDriver] = None

    def _fresh_state(self) -> EmulatorState:
        return create_state(jax.random.PRNGKey(self.config.seed))

    # ROM management

    def load_rom(self, filename: str):
        """Load a ROM file, replacing whatever program was in memory."""
        self.load_rom_bytes(read_rom(filename), source=filename)

    def load_rom_bytes(self, rom_data: bytes, source: str = "ROM"):
        self.state = load_rom_bytes(self._fresh_state(), rom_data)
        self.rom_data = bytes(rom_data)
        self.instruction_count = 0
        self.halted = False
        self.logger.info(f"Loaded {source} ({len(self.rom_data)} bytes)")

    def reset(self):
        """Restart the loaded ROM from a clean state."""
        self.load_rom_bytes(self.rom_data)
        self.logger.info("Reset")

    # Input and cancellation, safe to call from any thread

    def press_key(self, key: int):
        self._key_events.put((key, True))

    def release_key(self, key: int):
        self._key_events.put((key, False))

    def stop(self):
        """Request termination; observed before the next instruction."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def sound_active(self) -> bool:
        return int(self.state.sound_timer) > 0

    # Single-owner updates

    def _apply_key_events(self):
        pad = self.state.keypad
        changed = False
        while True:
            try:
                key, pressed = self._key_events.get_nowait()
            except queue.Empty:
                break
            pad = keypad.press(pad, key) if pressed else keypad.release(pad, key)
            changed = True
        if changed:
            self.state = self.state.replace(keypad=pad)

    def _apply_ticks(self, pending: int = 0) -> int:
        while True:
            try:
                self._ticks.get_nowait()
            except queue.Empty:
                break
            pending += 1
        for _ in range(pending):
            self.state = tick_timers(self.state)
        return pending

    def cycle(self) -> bool:
        """Execute one instruction, applying the unknown-opcode policy.

        Returns:
            False if the runner is (now) halted, True otherwise.

        Raises:
            Chip8Error: Fatal errors (stack overflow/underflow, memory access
                out of range) after logging them.
        """
        if self.halted:
            return False
        address = int(self.state.pc)
        try:
            self.state, instruction = try_step(self.state)
        except Chip8Error as e:
            self.halted = True
            self.logger.critical(f"{type(e).__name__}: {e}")
            raise

        if instruction is None:
            opcode = fetch(self.state)
            if self.config.on_unknown_opcode == "skip":
                self.logger.warning(f"Skipping unknown opcode 0x{opcode:04X} at 0x{address:03X}")
                self.state = self.state.replace(pc=jnp.astype(next_pc(self.state), jnp.uint16))
            else:
                self.logger.error(f"Halting on unknown opcode 0x{opcode:04X} at 0x{address:03X}")
                self.halted = True
                return False
        elif self.config.trace:
            self.logger.debug(f"0x{address:03X}: {mnemonic(instruction)}")

        self.instruction_count += 1
        return True

    def run_frame(self, ticks: int = 0) -> int:
        """Apply pending input and timer ticks, then run one frame of instructions.

        Returns:
            Number of instructions executed.
        """
        self._apply_key_events()
        self._apply_ticks(ticks)
        executed = 0
        for _ in range(self.config.instructions_per_frame):
            if self.cancelled or not self.cycle():
                break
            executed += 1
        return executed

    # Loops

    def run(self, on_frame: Optional[Callable[["Chip8Runner"], None]] = None, max_frames: Optional[int] = None):
        """Run in real time until stopped, halted, or ``max_frames`` frames.

        Frames are paced by the timer thread. ``on_frame`` is called after
        every frame (rendering, input polling) and keeps being called while a
        wait-for-key instruction stalls the program.
        """
        self._cancelled.clear()
        self._timer_driver = TimerDriver(self._ticks, self.config.timer_frequency)
        self._timer_driver.start()
        frames = 0
        poll_interval = 1.0 / self.config.timer_frequency
        try:
            while not self.cancelled and not self.halted:
                try:
                    self._ticks.get(timeout=poll_interval)
                except queue.Empty:
                    continue
                self.run_frame(ticks=1)
                if on_frame is not None:
                    on_frame(self)
                frames += 1
                if max_frames is not None and frames >= max_frames:
                    break
        finally:
            self._timer_driver.stop()
            self._timer_driver.join()
            self._timer_driver = None
        return frames

    def run_headless(self, cycles: int, progress: bool = False) -> int:
        """Run a fixed number of cycles as fast as possible.

        Timers are ticked once every ``instructions_per_frame`` cycles instead
        of by wall clock.

        Returns:
            Number of instructions executed.
        """
        per_frame = self.config.instructions_per_frame
        executed = 0
        with tqdm(total=cycles, desc="Running", unit="instr", disable=not progress) as bar:
            while executed < cycles and not self.cancelled:
                self._apply_key_events()
                if not self.cycle():
                    break
                executed += 1
                bar.update(1)
                if executed % per_frame == 0:
                    self.state = tick_timers(self.state)
        return executed
