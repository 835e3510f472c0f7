"""Tests for the fetch-decode-execute loop, timers and fault reporting."""

import numpy as np
import pytest
from chip8core import (
    create_state, execute, fetch, step, tick, run, load_rom, Op, UnknownOpcode, FatalError,
    MemoryAccessError, StackOverflow, FONT_DATA, PROGRAM_START,
)
from chip8core.emulator import HANDLERS
from chip8core.logging import ExecutionLogger
from conftest import rom


def test_handler_table_is_exhaustive():
    assert set(HANDLERS) == set(Op) - {Op.UNKNOWN}


class TestFetch:

    def test_fetch_is_big_endian_and_advances_pc(self, fresh_state):
        state = load_rom(fresh_state, bytes([0xA2, 0xF0]))
        state, instruction = fetch(state)
        assert instruction == 0xA2F0
        assert state.pc == PROGRAM_START + 2

    def test_fetch_past_end_of_memory(self, fresh_state):
        state = execute(fresh_state, 0x1FFF)
        with pytest.raises(MemoryAccessError) as excinfo:
            fetch(state)
        assert excinfo.value.pc == 0xFFF
        assert excinfo.value.instruction is None


class TestStep:

    def test_pc_stays_even(self, fresh_state):
        state = load_rom(fresh_state, rom(0x6001, 0x3001, 0x6002, 0x6003))
        for _ in range(3):
            state = step(state)
            assert int(state.pc) % 2 == 0
        assert state.pc == 0x208
        assert state.V[0] == 3

    @pytest.mark.parametrize("instruction", [0x5121, 0x912F, 0x8128, 0xE19F, 0xF1FF])
    def test_unknown_opcode_halts(self, fresh_state, instruction):
        state = load_rom(fresh_state, rom(instruction))
        with pytest.raises(UnknownOpcode) as excinfo:
            step(state)
        assert excinfo.value.pc == PROGRAM_START
        assert excinfo.value.instruction == instruction


class TestTick:

    def test_tick_decrements_both_timers(self, fresh_state):
        state = fresh_state.replace(delay_timer=fresh_state.delay_timer + 3, sound_timer=fresh_state.sound_timer + 1)
        state = tick(state)
        assert state.delay_timer == 2
        assert state.sound_timer == 0

    def test_tick_never_wraps_below_zero(self, fresh_state):
        state = tick(tick(fresh_state))
        assert state.delay_timer == 0
        assert state.sound_timer == 0

    def test_instructions_do_not_decay_timers(self, fresh_state):
        state = load_rom(fresh_state, rom(0x6009, 0xF015, 0x1204))
        state = run(state, 50)
        assert state.delay_timer == 9


class TestRun:

    def test_run_ticks_on_host_cadence(self, fresh_state):
        state = load_rom(fresh_state, rom(0x600A, 0xF015, 0x1204))
        state = run(state, 12, instructions_per_tick=4)
        assert state.delay_timer == 10 - 3

    def test_run_stops_at_instruction_budget(self, fresh_state):
        state = load_rom(fresh_state, rom(0x7001, 0x1200))
        state = run(state, 9)
        assert state.V[0] == 5

    def test_run_rejects_bad_tick_cadence(self, fresh_state):
        with pytest.raises(ValueError):
            run(fresh_state, 1, instructions_per_tick=0)

    def test_run_logs_and_reraises_faults(self, fresh_state, capsys):
        logger = ExecutionLogger(log_level="INFO", use_colors=False, show_timestamps=False)
        state = load_rom(fresh_state, rom(0x2200))  # recursive call with no return

        with pytest.raises(StackOverflow) as excinfo:
            run(state, 100, logger=logger)

        assert isinstance(excinfo.value, FatalError)
        assert excinfo.value.pc == PROGRAM_START
        output = capsys.readouterr().out
        assert "StackOverflow" in output
        assert "CALL 0x200" in output


def test_draw_digit_one_end_to_end():
    """Set V1 = 1, point I at glyph 1 and draw it at (V0, V0)."""
    state = load_rom(create_state(), rom(0x6101, 0xF129, 0xD005))
    state = run(state, 3)

    expected = np.zeros((64, 32), dtype=bool)
    for row, byte in enumerate(FONT_DATA[5:10]):
        for col in range(8):
            expected[col, row] = bool(byte & (0x80 >> col))

    np.testing.assert_array_equal(np.array(state.display), expected)
    assert state.I == 5
    assert state.V[15] == 0


def test_package_exports_match_all():
    import chip8core

    for name in chip8core.__all__:
        assert hasattr(chip8core, name), name
    assert not hasattr(chip8core, "NUM_KEYS")
    assert not hasattr(chip8core, "FLAG_REGISTER")
