"""Mnemonic rendering of CHIP-8 instructions for traces and diagnostics."""

from chip8core.decode import DecodedInstruction, Op, decode

_FORMATS = {
    Op.MACHINE_CALL: "SYS 0x{nnn:03X}",
    Op.CLEAR_SCREEN: "CLS",
    Op.RETURN: "RET",
    Op.JUMP: "JP 0x{nnn:03X}",
    Op.CALL: "CALL 0x{nnn:03X}",
    Op.SKIP_IF_EQUAL_IMMEDIATE: "SE V{x:X}, 0x{nn:02X}",
    Op.SKIP_IF_NOT_EQUAL_IMMEDIATE: "SNE V{x:X}, 0x{nn:02X}",
    Op.SKIP_IF_EQUAL_REGISTER: "SE V{x:X}, V{y:X}",
    Op.SET: "LD V{x:X}, 0x{nn:02X}",
    Op.ADD: "ADD V{x:X}, 0x{nn:02X}",
    Op.ALU_SET: "LD V{x:X}, V{y:X}",
    Op.ALU_OR: "OR V{x:X}, V{y:X}",
    Op.ALU_AND: "AND V{x:X}, V{y:X}",
    Op.ALU_XOR: "XOR V{x:X}, V{y:X}",
    Op.ALU_ADD: "ADD V{x:X}, V{y:X}",
    Op.ALU_SUB_XY: "SUB V{x:X}, V{y:X}",
    Op.ALU_SHIFT_RIGHT: "SHR V{x:X}, V{y:X}",
    Op.ALU_SUB_YX: "SUBN V{x:X}, V{y:X}",
    Op.ALU_SHIFT_LEFT: "SHL V{x:X}, V{y:X}",
    Op.SKIP_IF_NOT_EQUAL_REGISTER: "SNE V{x:X}, V{y:X}",
    Op.SET_INDEX: "LD I, 0x{nnn:03X}",
    Op.JUMP_WITH_OFFSET: "JP V0, 0x{nnn:03X}",
    Op.RANDOM: "RND V{x:X}, 0x{nn:02X}",
    Op.DISPLAY: "DRW V{x:X}, V{y:X}, {n}",
    Op.SKIP_IF_KEY: "SKP V{x:X}",
    Op.SKIP_IF_NOT_KEY: "SKNP V{x:X}",
    Op.GET_DELAY_TIMER: "LD V{x:X}, DT",
    Op.WAIT_FOR_KEY: "LD V{x:X}, K",
    Op.SET_DELAY_TIMER: "LD DT, V{x:X}",
    Op.SET_SOUND_TIMER: "LD ST, V{x:X}",
    Op.ADD_TO_INDEX: "ADD I, V{x:X}",
    Op.FONT_CHARACTER: "LD F, V{x:X}",
    Op.BCD_CONVERSION: "LD B, V{x:X}",
    Op.STORE_REGISTERS: "LD [I], V{x:X}",
    Op.LOAD_REGISTERS: "LD V{x:X}, [I]",
    Op.UNKNOWN: "DW 0x{raw:04X}",
}


def format_instruction(instruction: DecodedInstruction) -> str:
    """Render an already decoded instruction."""
    return _FORMATS[instruction.op].format(
        raw=instruction.raw, x=instruction.x, y=instruction.y,
        n=instruction.n, nn=instruction.nn, nnn=instruction.nnn,
    )


def disassemble(instruction: int) -> str:
    """Render a 16-bit instruction word as an assembler mnemonic."""
    return format_instruction(decode(instruction))
