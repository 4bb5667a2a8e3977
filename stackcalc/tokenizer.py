import enum
import functools
from dataclasses import dataclass
from typing import Optional

from stackcalc.utils import UINT256_MAX_DIGITS, CalculatorError, PrintableEnum, fits_in_word


@dataclass
class TokenizerError(CalculatorError):
    errmsg: str
    code: str
    error_char_idx: int

    def __str__(self) -> str:
        print_start_idx = max(0, self.error_char_idx - 10)
        print_ellipsis_pre = print_start_idx > 0
        print_end_idx = min(len(self.code), self.error_char_idx + 10)
        print_ellipsis_post = print_end_idx < len(self.code)
        return "\n".join(
            [
                f"[Tokenizer error] {self.errmsg}",
                (
                    ("..." if print_ellipsis_pre else "")
                    + f"{self.code[print_start_idx:print_end_idx]}"
                    + ("..." if print_ellipsis_post else "")
                ),
                " " * (self.error_char_idx - print_start_idx + (3 if print_ellipsis_pre else 0)) + "^",
            ]
        )


@dataclass
class InvalidCharacterError(TokenizerError):
    char: str = ""


@dataclass
class InvalidNumberError(TokenizerError):
    literal: str = ""


class TokenType(PrintableEnum):
    # declaration order is the structural ordering of tokens
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    NUMBER = enum.auto()
    WHITESPACE = enum.auto()


@functools.total_ordering
@dataclass(frozen=True)
class Token:
    type: TokenType
    value: Optional[int] = None

    @classmethod
    def number(cls, n: int) -> "Token":
        return cls(type=TokenType.NUMBER, value=n)

    def _sort_key(self) -> tuple[int, int]:
        return (self.type.value, -1 if self.value is None else self.value)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        if self.type is TokenType.NUMBER:
            return str(self.value)
        return TOKEN_LEXEMES[self.type]


SINGLE_CHAR_TOKENS = {
    "(": TokenType.BRACKET_OPEN,
    ")": TokenType.BRACKET_CLOSE,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
}

TOKEN_LEXEMES = {type_: lexeme for lexeme, type_ in SINGLE_CHAR_TOKENS.items()}
TOKEN_LEXEMES[TokenType.WHITESPACE] = ""


def _starts_number(s: str) -> bool:
    return "0" <= s <= "9"


def tokenize(code: str) -> list[Token]:
    i = 0
    tokens: list[Token] = []
    while i < len(code):
        if _starts_number(code[i]):
            number_end_idx = i + 1
            while number_end_idx < len(code) and code[number_end_idx].isdigit():
                number_end_idx += 1
            literal = code[i:number_end_idx]
            tokens.append(Token.number(_parse_number(literal, code=code, start_idx=i)))
            i = number_end_idx - 1  # to account for += 1 later
        elif code[i] in SINGLE_CHAR_TOKENS:
            tokens.append(Token(type=SINGLE_CHAR_TOKENS[code[i]]))
        elif code[i].isspace():
            tokens.append(Token(type=TokenType.WHITESPACE))
        else:
            raise InvalidCharacterError(
                f"Invalid character: {code[i]}", code=code, error_char_idx=i, char=code[i]
            )
        i += 1

    return tokens


def _shorten(literal: str, max_len: int = 24) -> str:
    if len(literal) <= max_len:
        return literal
    return f"{literal[:10]}...{literal[-10:]}"


def _parse_number(literal: str, code: str, start_idx: int) -> int:
    error = InvalidNumberError(
        f"Invalid number: {_shorten(literal)}", code=code, error_char_idx=start_idx, literal=literal
    )
    # str.isdigit() also admits "²" and non-latin digits
    if not literal.isascii():
        raise error
    significant_digits = literal.lstrip("0") or "0"
    if len(significant_digits) > UINT256_MAX_DIGITS:
        raise error
    try:
        n = int(significant_digits)
    except ValueError as e:
        raise error from e
    if not fits_in_word(n):
        raise error
    return n


def untokenize(tokens: list[Token]) -> str:
    return " ".join(str(t) for t in tokens if t.type is not TokenType.WHITESPACE)
