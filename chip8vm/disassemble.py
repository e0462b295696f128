"""Mnemonic rendering of CHIP-8 instruction words."""

from chip8vm.decode import DecodedInstruction, decode

ALU_MNEMONICS = {
    0x0: "LD",
    0x1: "OR",
    0x2: "AND",
    0x3: "XOR",
    0x4: "ADD",
    0x5: "SUB",
    0x6: "SHR",
    0x7: "SUBN",
    0xE: "SHL",
}

MISC_FORMATS = {
    0x07: "LD V{x:X}, DT",
    0x0A: "LD V{x:X}, K",
    0x15: "LD DT, V{x:X}",
    0x18: "LD ST, V{x:X}",
    0x1E: "ADD I, V{x:X}",
    0x29: "LD F, V{x:X}",
    0x33: "LD B, V{x:X}",
    0x55: "LD [I], V{x:X}",
    0x65: "LD V{x:X}, [I]",
}


def _format(inst: DecodedInstruction) -> str | None:
    op, x, y = inst.opcode, inst.x, inst.y
    if op == 0x0:
        return {0x00E0: "CLS", 0x00EE: "RET"}.get(inst.raw)
    if op == 0x1:
        return f"JP 0x{inst.nnn:03X}"
    if op == 0x2:
        return f"CALL 0x{inst.nnn:03X}"
    if op == 0x3:
        return f"SE V{x:X}, 0x{inst.kk:02X}"
    if op == 0x4:
        return f"SNE V{x:X}, 0x{inst.kk:02X}"
    if op == 0x5:
        return f"SE V{x:X}, V{y:X}" if inst.n == 0 else None
    if op == 0x6:
        return f"LD V{x:X}, 0x{inst.kk:02X}"
    if op == 0x7:
        return f"ADD V{x:X}, 0x{inst.kk:02X}"
    if op == 0x8:
        mnemonic = ALU_MNEMONICS.get(inst.n)
        return f"{mnemonic} V{x:X}, V{y:X}" if mnemonic else None
    if op == 0x9:
        return f"SNE V{x:X}, V{y:X}" if inst.n == 0 else None
    if op == 0xA:
        return f"LD I, 0x{inst.nnn:03X}"
    if op == 0xB:
        return f"JP V0, 0x{inst.nnn:03X}"
    if op == 0xC:
        return f"RND V{x:X}, 0x{inst.kk:02X}"
    if op == 0xD:
        return f"DRW V{x:X}, V{y:X}, {inst.n}"
    if op == 0xE:
        return {0x9E: f"SKP V{x:X}", 0xA1: f"SKNP V{x:X}"}.get(inst.kk)
    fmt = MISC_FORMATS.get(inst.kk)
    return fmt.format(x=x) if fmt else None


def disassemble(word: int) -> str:
    """Render ``word`` as an assembly mnemonic, e.g. ``DRW V0, V1, 5``.

    Words that are not valid instructions render as ``DW 0xNNNN``.
    """
    inst = decode(word)
    text = _format(inst)
    return text if text is not None else f"DW 0x{inst.raw:04X}"


def disassemble_program(data: bytes, origin: int = 0x200) -> list[tuple[int, int, str]]:
    """Disassemble a raw program into ``(address, word, mnemonic)`` rows.

    A trailing odd byte is reported as a one-byte ``DB`` row.
    """
    rows = []
    for offset in range(0, len(data) - 1, 2):
        word = (data[offset] << 8) | data[offset + 1]
        rows.append((origin + offset, word, disassemble(word)))
    if len(data) % 2:
        last = data[-1]
        rows.append((origin + len(data) - 1, last, f"DB 0x{last:02X}"))
    return rows
