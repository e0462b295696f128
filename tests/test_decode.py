"""Tests for instruction decoding and disassembly."""

import pytest
from chip8vm import decode, disassemble, disassemble_program


class TestDecode:
    """Test field extraction."""

    def test_decode_fields(self):
        inst = decode(0xD123)

        assert inst.raw == 0xD123
        assert inst.opcode == 0xD
        assert inst.x == 0x1
        assert inst.y == 0x2
        assert inst.n == 0x3
        assert inst.kk == 0x23
        assert inst.nnn == 0x123

    def test_decode_is_deterministic(self):
        assert decode(0x8AB4) == decode(0x8AB4)

    @pytest.mark.parametrize("word", [0x0000, 0xFFFF, 0x1234, 0xA5A5])
    def test_fields_reassemble(self, word):
        inst = decode(word)
        assert (inst.opcode << 12) | (inst.x << 8) | (inst.y << 4) | inst.n == word
        assert (inst.x << 8) | inst.kk == inst.nnn


class TestDisassemble:
    """Test mnemonic rendering."""

    @pytest.mark.parametrize("word,text", [
        (0x00E0, "CLS"),
        (0x00EE, "RET"),
        (0x1ABC, "JP 0xABC"),
        (0x2300, "CALL 0x300"),
        (0x3542, "SE V5, 0x42"),
        (0x4320, "SNE V3, 0x20"),
        (0x5120, "SE V1, V2"),
        (0x6A42, "LD VA, 0x42"),
        (0x7105, "ADD V1, 0x05"),
        (0x8234, "ADD V2, V3"),
        (0x834E, "SHL V3, V4"),
        (0x9780, "SNE V7, V8"),
        (0xA123, "LD I, 0x123"),
        (0xB250, "JP V0, 0x250"),
        (0xC20F, "RND V2, 0x0F"),
        (0xD015, "DRW V0, V1, 5"),
        (0xE09E, "SKP V0"),
        (0xE1A1, "SKNP V1"),
        (0xF00A, "LD V0, K"),
        (0xF233, "LD B, V2"),
        (0xFF65, "LD VF, [I]"),
    ])
    def test_known_instructions(self, word, text):
        assert disassemble(word) == text

    @pytest.mark.parametrize("word", [0x0123, 0x5121, 0x8128, 0x9781, 0xE0FF, 0xF0FF])
    def test_unknown_words(self, word):
        assert disassemble(word) == f"DW 0x{word:04X}"

    def test_disassemble_program(self):
        rows = disassemble_program(bytes([0x60, 0x05, 0x12, 0x00, 0xAB]))

        assert rows == [
            (0x200, 0x6005, "LD V0, 0x05"),
            (0x202, 0x1200, "JP 0x200"),
            (0x204, 0xAB, "DB 0xAB"),
        ]
