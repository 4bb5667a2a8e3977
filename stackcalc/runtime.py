import logging
from dataclasses import dataclass
from typing import Callable

from stackcalc.bytecode import Bytecode, Opcode
from stackcalc.utils import CalculatorError, fits_in_word

logger = logging.getLogger(__name__)

STACK_CAPACITY = 1024


@dataclass
class CalcRuntimeError(CalculatorError):
    errmsg: str

    def __str__(self) -> str:
        return self.errmsg


@dataclass
class StackOverflowError(CalcRuntimeError):
    errmsg: str = "stack overflow"


@dataclass
class StackUnderflowError(CalcRuntimeError):
    errmsg: str = "stack underflow"


@dataclass
class DivisionByZeroError(CalcRuntimeError):
    errmsg: str = "division by zero"


@dataclass
class ArithmeticOverflowError(CalcRuntimeError):
    pass


class OperandStack:
    """Bounded stack of uint256 values, one per execution"""

    def __init__(self, capacity: int = STACK_CAPACITY) -> None:
        self.capacity = capacity
        self._items: list[int] = []

    def push(self, value: int) -> None:
        if len(self._items) >= self.capacity:
            raise StackOverflowError()
        self._items.append(value)

    def pop(self) -> int:
        if not self._items:
            raise StackUnderflowError()
        return self._items.pop()

    def top(self) -> int:
        if not self._items:
            raise StackUnderflowError()
        return self._items[-1]

    def __len__(self) -> int:
        return len(self._items)


BinaryOperationImpl = Callable[[int, int], int]


def _div(a: int, b: int) -> int:
    if b == 0:
        raise DivisionByZeroError()
    return a // b


BINARY_OPERATIONS: dict[Opcode, tuple[str, BinaryOperationImpl]] = {
    Opcode.ADD: ("Addition", lambda a, b: a + b),
    Opcode.MUL: ("Multiplication", lambda a, b: a * b),
    Opcode.SUB: ("Subtraction", lambda a, b: a - b),
    Opcode.DIV: ("Division", _div),
}


def eval_binary_operation(opcode: Opcode, a: int, b: int) -> int:
    if opcode not in BINARY_OPERATIONS:
        raise AssertionError(f"Unexpected binary opcode: {opcode.name}")
    op_name, impl = BINARY_OPERATIONS[opcode]
    result = impl(a, b)
    if not fits_in_word(result):
        raise ArithmeticOverflowError(f"{op_name} of {a} and {b} is out of the uint256 range")
    return result


def execute(bytecode: Bytecode, capacity: int = STACK_CAPACITY) -> int:
    """Runs bytecode on a fresh operand stack and returns the value left on top

    Binary opcodes pop `a`, then `b`, and push `a <op> b`. Any error aborts the whole run.
    """
    stack = OperandStack(capacity=capacity)
    for _, instruction in bytecode.instructions():
        if instruction.opcode is Opcode.PUSH32 and instruction.operand is not None:
            stack.push(instruction.operand)
        else:
            a = stack.pop()
            b = stack.pop()
            stack.push(eval_binary_operation(instruction.opcode, a, b))

    result = stack.top()
    if len(stack) > 1:
        logger.debug("%d values left on the stack, returning the top one", len(stack))
    return result
