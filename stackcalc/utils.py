import enum

WORD_SIZE = 32  # bytes
UINT256_MAX = 2 ** (8 * WORD_SIZE) - 1
UINT256_MAX_DIGITS = len(str(UINT256_MAX))


class CalculatorError(Exception):
    """Base for every error a user can trigger by typing an expression"""


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


def fits_in_word(n: int) -> bool:
    return 0 <= n <= UINT256_MAX


def to_word(n: int) -> bytes:
    return n.to_bytes(WORD_SIZE, byteorder="big", signed=False)


def from_word(b: bytes) -> int:
    return int.from_bytes(b, byteorder="big", signed=False)
