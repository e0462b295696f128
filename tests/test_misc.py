"""Tests for miscellaneous instructions (Fxxx)."""

import pytest
from chip8vm import execute, press_key, step, InvalidOpcode, MemoryOutOfBounds, FONT_DATA
from conftest import set_registers


class TestTimers:
    """Test timer-related instructions."""

    def test_misc_timer_instructions(self, fresh_state):
        """Test timer set and get operations."""
        state = fresh_state

        state = execute(state, 0x6030)  # V0 = 48
        state = execute(state, 0xF015)  # Set delay timer to V0
        assert state.delay_timer == 48

        state = execute(state, 0x6120)  # V1 = 32
        state = execute(state, 0xF118)  # Set sound timer to V1
        assert state.sound_timer == 32

        state = execute(state, 0xF207)  # V2 = delay timer
        assert state.V[2] == 48


class TestBCD:
    """Test BCD conversion."""

    @pytest.mark.parametrize("value,digits", [(157, (1, 5, 7)), (156, (1, 5, 6)), (0, (0, 0, 0)), (255, (2, 5, 5)), (9, (0, 0, 9)), (40, (0, 4, 0))])
    def test_misc_bcd_conversion(self, fresh_state, value, digits):
        """FX33 writes hundreds, tens, ones at I, I+1, I+2."""
        state = set_registers(fresh_state, V0=value)
        state = execute(state, 0xA300)  # I = 0x300
        state = execute(state, 0xF033)

        assert tuple(int(b) for b in state.memory[0x300:0x303]) == digits
        assert state.I == 0x300

    def test_bcd_past_memory_end(self, fresh_state):
        """FX33 needs three bytes of room."""
        state = execute(fresh_state, 0xAFFE)

        with pytest.raises(MemoryOutOfBounds):
            execute(state, 0xF033)


class TestFont:
    """Test font character addressing."""

    def test_font_loaded(self, fresh_state):
        """The glyph table sits at 0x50."""
        assert [int(b) for b in fresh_state.memory[0x50:0xA0]] == FONT_DATA

    def test_misc_font_character(self, fresh_state):
        """Test font character addressing."""
        state = execute(fresh_state, 0x600A)  # V0 = 0xA
        state = execute(state, 0xF029)

        assert state.I == 0x50 + (0xA * 5)

    def test_font_all_characters(self, fresh_state):
        """Test font addressing for all hex digits."""
        state = fresh_state

        for digit in range(16):
            state = execute(state, 0x6000 | digit)
            state = execute(state, 0xF029)

            expected = 0x50 + (digit * 5)
            assert state.I == expected, f"Font address wrong for digit {digit:X}"

    def test_font_uses_low_nibble(self, fresh_state):
        state = set_registers(fresh_state, V4=0x3B)
        state = execute(state, 0xF429)
        assert state.I == 0x50 + 0xB * 5


class TestMemoryOperations:
    """Test store/load register operations."""

    def test_store_load_round_trip(self, fresh_state):
        """FX55 then FX65 restores V0..VX and advances I by X+1 each time."""
        values = [0x01, 0x22, 0x33, 0xFE]
        state = set_registers(fresh_state, **{f"V{i:X}": v for i, v in enumerate(values)})
        state = execute(state, 0xA400)

        state = execute(state, 0xF355)
        assert state.I == 0x404
        assert [int(b) for b in state.memory[0x400:0x404]] == values

        state = set_registers(state, V0=0, V1=0, V2=0, V3=0)
        state = execute(state, 0xA400)
        state = execute(state, 0xF365)

        assert [int(v) for v in state.V[:4]] == values
        assert state.I == 0x404

    def test_store_only_touches_range(self, fresh_state):
        """FX55 writes exactly X+1 bytes."""
        state = set_registers(fresh_state, V0=1, V1=2, V2=3)
        state = execute(state, 0xA500)

        state = execute(state, 0xF155)

        assert state.memory[0x500] == 1
        assert state.memory[0x501] == 2
        assert state.memory[0x502] == 0

    def test_load_only_touches_range(self, fresh_state):
        """FX65 leaves registers above X alone."""
        state = fresh_state.replace(memory=fresh_state.memory.at[0x500:0x503].set(9))
        state = set_registers(state, V2=0x77)
        state = execute(state, 0xA500)

        state = execute(state, 0xF165)

        assert state.V[0] == 9
        assert state.V[1] == 9
        assert state.V[2] == 0x77

    def test_store_all_registers(self, fresh_state):
        """FF55 stores all sixteen registers."""
        state = set_registers(fresh_state, **{f"V{i:X}": i * 3 for i in range(16)})
        state = execute(state, 0xA600)

        state = execute(state, 0xFF55)

        assert [int(b) for b in state.memory[0x600:0x610]] == [i * 3 for i in range(16)]
        assert state.I == 0x610

    def test_store_past_memory_end(self, fresh_state):
        state = execute(fresh_state, 0xAFFC)

        with pytest.raises(MemoryOutOfBounds):
            execute(state, 0xF555)

    def test_load_past_memory_end(self, fresh_state):
        state = execute(fresh_state, 0xAFFF)

        state = execute(state, 0xF065)  # One byte fits
        assert state.I == 0x1000
        with pytest.raises(MemoryOutOfBounds):
            execute(state, 0xF065)


class TestKeyWait:
    """Test FX0A key wait state."""

    def test_wait_enters_waiting_state(self, fresh_state):
        """FX0A marks the state as waiting on VX."""
        state = execute(fresh_state, 0xF50A)

        assert state.waiting_for_key
        assert state.key_register == 5

    def test_step_makes_no_progress_while_waiting(self, fresh_state):
        """Repeated steps leave PC alone until a key arrives."""
        state = execute(fresh_state, 0xF50A)
        pc = int(state.pc)

        for _ in range(5):
            state = step(state)

        assert state.pc == pc
        assert state.waiting_for_key

    def test_key_press_resumes(self, fresh_state):
        """A press stores the key in VX and clears the wait."""
        state = execute(fresh_state, 0xF50A)

        state = press_key(state, 0xB, True)

        assert not state.waiting_for_key
        assert state.V[5] == 0xB

    def test_held_key_does_not_satisfy_wait(self, fresh_state):
        """Only a fresh press ends the wait."""
        state = press_key(fresh_state, 3, True)
        state = execute(state, 0xF00A)

        state = press_key(state, 3, True)
        assert state.waiting_for_key

        state = press_key(state, 3, False)
        state = press_key(state, 3, True)
        assert not state.waiting_for_key
        assert state.V[0] == 3

    def test_release_does_not_satisfy_wait(self, fresh_state):
        state = press_key(fresh_state, 2, True)
        state = execute(state, 0xF00A)

        state = press_key(state, 2, False)

        assert state.waiting_for_key


class TestMiscInstructionDispatch:
    """Test misc instruction dispatch logic."""

    def test_add_to_index(self, fresh_state):
        """Test FX1E - Add VX to I register."""
        state = execute(fresh_state, 0x6010)  # V0 = 0x10
        state = execute(state, 0xA300)  # I = 0x300
        state = execute(state, 0xF01E)

        assert state.I == 0x310

    def test_add_to_index_leaves_flag(self, fresh_state):
        """FX1E past 0xFFF neither wraps nor touches VF."""
        state = set_registers(fresh_state, V0=0xFF, VF=0x21)
        state = execute(state, 0xAF80)
        state = execute(state, 0xF01E)

        assert state.I == 0x107F
        assert state.V[15] == 0x21

    @pytest.mark.parametrize("word", [0xF000, 0xF008, 0xF019, 0xF030, 0xF075, 0xF085, 0xF0FF])
    def test_unknown_misc_instruction(self, fresh_state, word):
        with pytest.raises(InvalidOpcode) as excinfo:
            execute(fresh_state, word)
        assert excinfo.value.word == word
