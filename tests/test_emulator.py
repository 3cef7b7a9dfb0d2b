"""Tests for the fetch/decode/execute cycle, ROM loading and timers."""

import dataclasses

import jax
import pytest
from chippy import (
    EmulatorState, StackState, create_state, fetch, step, try_step,
    load_rom, load_rom_bytes, tick_timers,
    RomLoadError, UnrecognizedOpcodeError, MemoryAccessError,
    PROGRAM_START, FONT_START,
)
from chippy.constants import FONT_DATA, MAX_ROM_SIZE
from chippy import isa
from conftest import program


class TestInitialState:
    """Test the power-on state."""

    def test_create_state(self, fresh_state):
        assert fresh_state.pc == PROGRAM_START
        assert fresh_state.I == 0
        assert int(fresh_state.V.sum()) == 0
        assert fresh_state.stack.depth == 0
        assert fresh_state.delay_timer == 0
        assert fresh_state.sound_timer == 0
        assert not fresh_state.display.any()
        assert not fresh_state.keypad.any()

    def test_fields_use_default_factories(self):
        """Array fields are built per instance, never shared as class-level defaults."""
        for cls in (EmulatorState, StackState):
            for f in dataclasses.fields(cls):
                if f.name in ("rng", "pointer"):
                    continue
                assert f.default is dataclasses.MISSING, f"{cls.__name__}.{f.name}"

        assert EmulatorState(jax.random.PRNGKey(1)).stack.depth == 0

    def test_font_loaded(self, fresh_state):
        font = [int(b) for b in fresh_state.memory[FONT_START:FONT_START + len(FONT_DATA)]]
        assert font == FONT_DATA
        assert int(fresh_state.memory[PROGRAM_START:].sum()) == 0


class TestRomLoading:
    """Test copying programs into memory."""

    def test_load_rom_bytes(self, fresh_state):
        state = load_rom_bytes(fresh_state, program(0x6001, 0x1200))
        assert [int(b) for b in state.memory[0x200:0x204]] == [0x60, 0x01, 0x12, 0x00]

    def test_load_rom_file(self, fresh_state, tmp_path):
        rom = tmp_path / "test.ch8"
        rom.write_bytes(program(0x00E0))
        state = load_rom(fresh_state, str(rom))
        assert fetch(state) == 0x00E0

    def test_largest_rom_fits(self, fresh_state):
        state = load_rom_bytes(fresh_state, bytes([0xAB]) * MAX_ROM_SIZE)
        assert state.memory[0xFFF] == 0xAB

    def test_rom_too_large(self, fresh_state):
        with pytest.raises(RomLoadError) as excinfo:
            load_rom_bytes(fresh_state, bytes(MAX_ROM_SIZE + 1))
        assert excinfo.value.size == MAX_ROM_SIZE + 1

    def test_missing_rom(self, fresh_state, tmp_path):
        with pytest.raises(RomLoadError):
            load_rom(fresh_state, str(tmp_path / "missing.ch8"))


class TestCycle:
    """Test fetch and step."""

    def test_fetch_is_big_endian(self, fresh_state):
        state = load_rom_bytes(fresh_state, program(0xA2F0))
        assert fetch(state) == 0xA2F0
        assert state.pc == PROGRAM_START  # fetch does not move pc

    def test_step_commits_pc(self, fresh_state):
        state = load_rom_bytes(fresh_state, program(0x6005, 0x3005, 0x0000, 0x1200))
        state = step(state)  # V0 = 5
        assert state.pc == 0x202
        state = step(state)  # skip next
        assert state.pc == 0x206
        state = step(state)  # jump
        assert state.pc == 0x200

    def test_call_then_return_program(self, fresh_state):
        rom = program(0x2206, 0x6107, 0x1204, 0x00EE)
        state = load_rom_bytes(fresh_state, rom)

        state = step(state)  # CALL 0x206
        assert state.pc == 0x206
        state = step(state)  # RET
        assert state.pc == 0x202
        assert state.stack.depth == 0
        state = step(state)
        assert state.V[1] == 7

    def test_step_unrecognized(self, fresh_state):
        state = load_rom_bytes(fresh_state, program(0x0123))
        with pytest.raises(UnrecognizedOpcodeError) as excinfo:
            step(state)
        assert excinfo.value.opcode == 0x0123
        assert excinfo.value.address == 0x200

    def test_try_step_unrecognized_leaves_state(self, fresh_state):
        state = load_rom_bytes(fresh_state, program(0x5121))
        new_state, instruction = try_step(state)
        assert instruction is None
        assert new_state is state

    def test_try_step_returns_instruction(self, fresh_state):
        state = load_rom_bytes(fresh_state, program(0x6A2A))
        state, instruction = try_step(state)
        assert instruction == isa.LoadByte(x=0xA, byte=0x2A)
        assert state.V[0xA] == 0x2A

    def test_fetch_past_end_of_memory(self, fresh_state):
        state = fresh_state.replace(pc=fresh_state.pc + 0xDFF)  # 0xFFF
        with pytest.raises(MemoryAccessError):
            step(state)


class TestTimers:
    """Test the external timer decrement."""

    def test_tick_decrements(self, fresh_state):
        state = fresh_state.replace(delay_timer=fresh_state.delay_timer + 3,
                                    sound_timer=fresh_state.sound_timer + 1)
        state = tick_timers(state)
        assert state.delay_timer == 2
        assert state.sound_timer == 0

    def test_tick_stops_at_zero(self, fresh_state):
        state = tick_timers(tick_timers(fresh_state))
        assert state.delay_timer == 0
        assert state.sound_timer == 0
