import pytest

from stackcalc.bytecode import Bytecode, Opcode, UnknownOpcodeError
from stackcalc.runtime import (
    STACK_CAPACITY,
    ArithmeticOverflowError,
    DivisionByZeroError,
    OperandStack,
    StackOverflowError,
    StackUnderflowError,
    execute,
)
from stackcalc.utils import UINT256_MAX, to_word


def push(n: int) -> bytes:
    return bytes([Opcode.PUSH32]) + to_word(n)


def program(*parts: bytes | Opcode) -> Bytecode:
    return Bytecode(b"".join(bytes([p]) if isinstance(p, Opcode) else p for p in parts))


def test_stack_push_pop() -> None:
    stack = OperandStack()
    assert len(stack) == 0
    with pytest.raises(StackUnderflowError):
        stack.pop()
    assert len(stack) == 0

    stack.push(2)
    assert len(stack) == 1
    assert stack.top() == 2

    while len(stack) < STACK_CAPACITY:
        stack.push(2)
    assert len(stack) == 1024
    with pytest.raises(StackOverflowError):
        stack.push(2)
    assert len(stack) == 1024

    assert stack.pop() == 2
    assert len(stack) == 1023


def test_stack_top_of_empty_stack() -> None:
    with pytest.raises(StackUnderflowError):
        OperandStack().top()


def test_execute_worked_example() -> None:
    bytecode = program(push(2), push(3), push(4), Opcode.MUL, Opcode.DIV, push(156), Opcode.ADD)
    assert execute(bytecode) == 162


@pytest.mark.parametrize(
    "opcode, expected",
    [
        pytest.param(Opcode.ADD, 13),
        pytest.param(Opcode.MUL, 30),
        pytest.param(Opcode.SUB, 7),
        pytest.param(Opcode.DIV, 3),
    ],
)
def test_last_pushed_value_is_left_operand(opcode: Opcode, expected: int) -> None:
    assert execute(program(push(3), push(10), opcode)) == expected


def test_1025th_push_overflows() -> None:
    bytecode = program(*[push(1)] * (STACK_CAPACITY + 1))
    with pytest.raises(StackOverflowError):
        execute(bytecode)
    assert execute(program(*[push(1)] * STACK_CAPACITY)) == 1


@pytest.mark.parametrize(
    "bytecode",
    [
        pytest.param(Bytecode(b""), id="empty"),
        pytest.param(program(Opcode.ADD), id="no operands"),
        pytest.param(program(push(1), Opcode.SUB), id="one operand"),
    ],
)
def test_underflow(bytecode: Bytecode) -> None:
    with pytest.raises(StackUnderflowError) as exc_info:
        execute(bytecode)
    assert str(exc_info.value) == "stack underflow"


def test_division_by_zero() -> None:
    with pytest.raises(DivisionByZeroError):
        execute(program(push(0), push(1), Opcode.DIV))


@pytest.mark.parametrize(
    "bytecode",
    [
        pytest.param(program(push(2), push(1), Opcode.SUB), id="below zero"),
        pytest.param(program(push(1), push(UINT256_MAX), Opcode.ADD), id="add"),
        pytest.param(program(push(2), push(UINT256_MAX), Opcode.MUL), id="mul"),
    ],
)
def test_results_stay_in_uint256_range(bytecode: Bytecode) -> None:
    with pytest.raises(ArithmeticOverflowError):
        execute(bytecode)


def test_unknown_opcode_aborts_run() -> None:
    with pytest.raises(UnknownOpcodeError):
        execute(program(push(1), push(2), bytes([0xFF])))


def test_extra_values_return_top() -> None:
    assert execute(program(push(1), push(2))) == 2


def test_capacity_is_configurable() -> None:
    with pytest.raises(StackOverflowError):
        execute(program(push(1), push(1)), capacity=1)
