import logging
from dataclasses import dataclass

from stackcalc.bytecode import Bytecode, generate
from stackcalc.parser import PrefixSequence, parse
from stackcalc.runtime import STACK_CAPACITY, execute
from stackcalc.tokenizer import Token, tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompilationTrace:
    source: str
    tokens: tuple[Token, ...]
    prefix: PrefixSequence
    bytecode: Bytecode


def compile_source(source: str) -> CompilationTrace:
    tokens = tokenize(source)
    logger.debug("Lexer (str to tokens)> %s", tokens)
    prefix = parse(tokens)
    logger.debug("Parser (tokens to prefix notation)> %s", prefix)
    bytecode = generate(prefix)
    logger.debug("Compiler (prefix notation to bytecode)> %s", bytecode)
    return CompilationTrace(source=source, tokens=tuple(tokens), prefix=prefix, bytecode=bytecode)


def calculate(source: str, capacity: int = STACK_CAPACITY) -> int:
    trace = compile_source(source)
    result = execute(trace.bytecode, capacity=capacity)
    logger.debug("Runtime (bytecode to value)> %d", result)
    return result
