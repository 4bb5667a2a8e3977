"""Instruction set of the stack machine and the code generator targeting it

Opcode table (a subset of EVM opcodes):

    01  ADD
    02  MUL
    03  SUB
    04  DIV
    7F  PUSH32  <32 bytes, big-endian unsigned operand>

The hexadecimal text form of a program (`Bytecode.hex()`) is meant for logs and debugging only.
"""
import enum
from dataclasses import dataclass
from typing import Iterator, Optional

from stackcalc.parser import PrefixSequence
from stackcalc.tokenizer import TokenType
from stackcalc.utils import WORD_SIZE, CalculatorError, from_word, to_word


@dataclass
class InvalidBytecodeError(CalculatorError):
    errmsg: str
    offset: int

    def __str__(self) -> str:
        return f"[Bytecode error] {self.errmsg} (at byte {self.offset})"


@dataclass
class UnknownOpcodeError(InvalidBytecodeError):
    byte: int = 0


class Opcode(enum.IntEnum):
    ADD = 0x01
    MUL = 0x02
    SUB = 0x03
    DIV = 0x04
    PUSH32 = 0x7F

    def __str__(self) -> str:
        return f"{self.value:02X}"


TOKEN_OPCODES = {
    TokenType.PLUS: Opcode.ADD,
    TokenType.STAR: Opcode.MUL,
    TokenType.MINUS: Opcode.SUB,
    TokenType.SLASH: Opcode.DIV,
}


@dataclass(frozen=True)
class Instruction:
    opcode: Opcode
    operand: Optional[int] = None

    def __str__(self) -> str:
        if self.operand is None:
            return self.opcode.name
        return f"{self.opcode.name} {self.operand}"


@dataclass(frozen=True)
class Bytecode:
    code: bytes = b""

    @classmethod
    def from_hex(cls, text: str) -> "Bytecode":
        return cls(bytes.fromhex(text))

    def hex(self) -> str:
        return self.code.hex().upper()

    def instructions(self) -> Iterator[tuple[int, Instruction]]:
        """Decodes instructions lazily, yielding (offset, instruction) pairs"""
        offset = 0
        while offset < len(self.code):
            byte = self.code[offset]
            try:
                opcode = Opcode(byte)
            except ValueError:
                raise UnknownOpcodeError("unknown operation", offset=offset, byte=byte) from None

            if opcode is Opcode.PUSH32:
                operand_bytes = self.code[offset + 1 : offset + 1 + WORD_SIZE]
                if len(operand_bytes) < WORD_SIZE:
                    raise InvalidBytecodeError(
                        f"PUSH32 operand truncated to {len(operand_bytes)} bytes", offset=offset
                    )
                yield offset, Instruction(opcode=opcode, operand=from_word(operand_bytes))
                offset += 1 + WORD_SIZE
            else:
                yield offset, Instruction(opcode=opcode)
                offset += 1

    def __len__(self) -> int:
        return len(self.code)

    def __str__(self) -> str:
        return self.hex()


def generate(prefix: PrefixSequence) -> Bytecode:
    # prefix notation read backwards is exactly the execution order of a stack machine
    code = bytearray()
    for token in reversed(prefix):
        if token.type is TokenType.NUMBER and token.value is not None:
            code.append(Opcode.PUSH32)
            code += to_word(token.value)
        elif token.type in TOKEN_OPCODES:
            code.append(TOKEN_OPCODES[token.type])
        else:
            raise AssertionError(f"Token {token.type} can't appear in prefix notation")
    return Bytecode(bytes(code))


def disassemble(bytecode: Bytecode) -> str:
    return "\n".join(f"{offset:04X}: {instruction}" for offset, instruction in bytecode.instructions())
