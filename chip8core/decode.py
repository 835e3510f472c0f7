"""CHIP-8 instruction decoding."""

import enum

from chex import dataclass


class Op(enum.Enum):
    """Every instruction the interpreter recognises, plus UNKNOWN."""
    MACHINE_CALL = "0NNN"
    CLEAR_SCREEN = "00E0"
    RETURN = "00EE"
    JUMP = "1NNN"
    CALL = "2NNN"
    SKIP_IF_EQUAL_IMMEDIATE = "3XNN"
    SKIP_IF_NOT_EQUAL_IMMEDIATE = "4XNN"
    SKIP_IF_EQUAL_REGISTER = "5XY0"
    SET = "6XNN"
    ADD = "7XNN"
    ALU_SET = "8XY0"
    ALU_OR = "8XY1"
    ALU_AND = "8XY2"
    ALU_XOR = "8XY3"
    ALU_ADD = "8XY4"
    ALU_SUB_XY = "8XY5"
    ALU_SHIFT_RIGHT = "8XY6"
    ALU_SUB_YX = "8XY7"
    ALU_SHIFT_LEFT = "8XYE"
    SKIP_IF_NOT_EQUAL_REGISTER = "9XY0"
    SET_INDEX = "ANNN"
    JUMP_WITH_OFFSET = "BNNN"
    RANDOM = "CXNN"
    DISPLAY = "DXYN"
    SKIP_IF_KEY = "EX9E"
    SKIP_IF_NOT_KEY = "EXA1"
    GET_DELAY_TIMER = "FX07"
    WAIT_FOR_KEY = "FX0A"
    SET_DELAY_TIMER = "FX15"
    SET_SOUND_TIMER = "FX18"
    ADD_TO_INDEX = "FX1E"
    FONT_CHARACTER = "FX29"
    BCD_CONVERSION = "FX33"
    STORE_REGISTERS = "FX55"
    LOAD_REGISTERS = "FX65"
    UNKNOWN = "????"


_SYSTEM_OPS = {0x00E0: Op.CLEAR_SCREEN, 0x00EE: Op.RETURN}

_FIXED_OPS = {
    0x1: Op.JUMP,
    0x2: Op.CALL,
    0x3: Op.SKIP_IF_EQUAL_IMMEDIATE,
    0x4: Op.SKIP_IF_NOT_EQUAL_IMMEDIATE,
    0x6: Op.SET,
    0x7: Op.ADD,
    0xA: Op.SET_INDEX,
    0xB: Op.JUMP_WITH_OFFSET,
    0xC: Op.RANDOM,
    0xD: Op.DISPLAY,
}

# 5XY0 and 9XY0 only accept N == 0
_REGISTER_COMPARE_OPS = {0x5: Op.SKIP_IF_EQUAL_REGISTER, 0x9: Op.SKIP_IF_NOT_EQUAL_REGISTER}

_ALU_OPS = {
    0x0: Op.ALU_SET,
    0x1: Op.ALU_OR,
    0x2: Op.ALU_AND,
    0x3: Op.ALU_XOR,
    0x4: Op.ALU_ADD,
    0x5: Op.ALU_SUB_XY,
    0x6: Op.ALU_SHIFT_RIGHT,
    0x7: Op.ALU_SUB_YX,
    0xE: Op.ALU_SHIFT_LEFT,
}

_KEY_OPS = {0x9E: Op.SKIP_IF_KEY, 0xA1: Op.SKIP_IF_NOT_KEY}

_MISC_OPS = {
    0x07: Op.GET_DELAY_TIMER,
    0x0A: Op.WAIT_FOR_KEY,
    0x15: Op.SET_DELAY_TIMER,
    0x18: Op.SET_SOUND_TIMER,
    0x1E: Op.ADD_TO_INDEX,
    0x29: Op.FONT_CHARACTER,
    0x33: Op.BCD_CONVERSION,
    0x55: Op.STORE_REGISTERS,
    0x65: Op.LOAD_REGISTERS,
}


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    op: Op
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


def identify(instruction: int) -> Op:
    """Map a 16-bit instruction word to its operation."""
    opcode = (instruction & 0xF000) >> 12
    n = instruction & 0x000F
    nn = instruction & 0x00FF

    if opcode == 0x0:
        return _SYSTEM_OPS.get(instruction, Op.MACHINE_CALL)
    if opcode in _FIXED_OPS:
        return _FIXED_OPS[opcode]
    if opcode in _REGISTER_COMPARE_OPS:
        return _REGISTER_COMPARE_OPS[opcode] if n == 0 else Op.UNKNOWN
    if opcode == 0x8:
        return _ALU_OPS.get(n, Op.UNKNOWN)
    if opcode == 0xE:
        return _KEY_OPS.get(nn, Op.UNKNOWN)
    return _MISC_OPS.get(nn, Op.UNKNOWN)


def decode(instruction: int) -> DecodedInstruction:
    """Decode 16-bit instruction into components."""
    instruction = int(instruction) & 0xFFFF
    return DecodedInstruction(
        raw=instruction,
        op=identify(instruction),
        opcode=(instruction & 0xF000) >> 12,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF
    )
