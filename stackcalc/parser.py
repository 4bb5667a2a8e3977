import enum
from dataclasses import dataclass
from typing import Iterator, Optional

from stackcalc.tokenizer import Token, TokenType, untokenize
from stackcalc.utils import CalculatorError, PrintableEnum


@dataclass
class ParserError(CalculatorError):
    errmsg: str
    tokens: list[Token]
    error_token_idx: int

    def __str__(self) -> str:
        parsed_code = untokenize(self.tokens[: self.error_token_idx])
        filler_whitespace = " " * (len(parsed_code) + 1) if parsed_code else ""
        return "\n".join([f"Parser error: {self.errmsg}", untokenize(self.tokens), filler_whitespace + "^"])


@dataclass
class MismatchedParenthesisError(ParserError):
    pass


@dataclass
class InvalidTokenListError(ParserError):
    pass


class Associativity(PrintableEnum):
    LEFT = enum.auto()
    RIGHT = enum.auto()


@dataclass(frozen=True)
class OperatorInfo:
    precedence: int
    associativity: Associativity
    arity: int

    def has_lower_precedence_than(self, other: "OperatorInfo") -> bool:
        return self.precedence < other.precedence


OPERATORS = {
    TokenType.PLUS: OperatorInfo(precedence=0, associativity=Associativity.LEFT, arity=2),
    TokenType.MINUS: OperatorInfo(precedence=0, associativity=Associativity.LEFT, arity=2),
    TokenType.STAR: OperatorInfo(precedence=1, associativity=Associativity.LEFT, arity=2),
    TokenType.SLASH: OperatorInfo(precedence=1, associativity=Associativity.LEFT, arity=2),
}


def get_operator(token: Token) -> Optional[OperatorInfo]:
    return OPERATORS.get(token.type)


@dataclass(frozen=True)
class PrefixSequence:
    """Operators and numbers in prefix (Polish) notation, e.g. `+ 156 / * 4 3 2`"""

    tokens: tuple[Token, ...] = ()

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __reversed__(self) -> Iterator[Token]:
        return reversed(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __str__(self) -> str:
        return " ".join(str(t) for t in self.tokens)


def _pops_before(incoming: OperatorInfo, top: OperatorInfo) -> bool:
    # scanning right to left flips associativity: equal precedence pops only for right-associative operators
    if incoming.has_lower_precedence_than(top):
        return True
    return incoming.precedence == top.precedence and incoming.associativity is Associativity.RIGHT


def parse(tokens: list[Token]) -> PrefixSequence:
    """Shunting-yard over the reversed token list, producing prefix notation

    Only grouping is validated here; operator arity errors surface when the bytecode is executed.
    """
    output: list[Token] = []
    # (index in tokens, token) so that errors can point at the offending bracket
    operator_stack: list[tuple[int, Token]] = []

    for i in reversed(range(len(tokens))):
        token = tokens[i]
        operator = get_operator(token)
        if token.type is TokenType.NUMBER:
            output.append(token)
        elif operator is not None:
            while operator_stack:
                top_operator = get_operator(operator_stack[-1][1])
                if top_operator is None or not _pops_before(operator, top_operator):
                    break
                output.append(operator_stack.pop()[1])
            operator_stack.append((i, token))
        elif token.type is TokenType.BRACKET_CLOSE:
            operator_stack.append((i, token))
        elif token.type is TokenType.BRACKET_OPEN:
            while operator_stack and operator_stack[-1][1].type is not TokenType.BRACKET_CLOSE:
                output.append(operator_stack.pop()[1])
            if not operator_stack:
                raise MismatchedParenthesisError("Mismatched parenthesis", tokens=tokens, error_token_idx=i)
            operator_stack.pop()
        elif token.type is TokenType.WHITESPACE:
            pass
        else:
            raise AssertionError(f"Unexpected token type: {token.type}")

    while operator_stack:
        i, token = operator_stack.pop()
        if token.type is TokenType.BRACKET_CLOSE:
            raise InvalidTokenListError(f"Invalid source: {untokenize(tokens)}", tokens=tokens, error_token_idx=i)
        output.append(token)

    return PrefixSequence(tuple(reversed(output)))
