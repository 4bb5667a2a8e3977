import random
import re
import string
import warnings

from stackcalc.api import calculate
from stackcalc.utils import UINT256_MAX, CalculatorError

warnings.filterwarnings("ignore")


def eval_py(code: str) -> int | str:
    try:
        res = eval(code.replace("/", "//"))
    except Exception as e:
        return str(e)
    if not isinstance(res, int) or not 0 <= res <= UINT256_MAX:
        return f"not a uint256: {res!r}"
    return res


def eval_my(code: str) -> int | str:
    try:
        return calculate(code)
    except CalculatorError as e:
        return str(e)


if __name__ == "__main__":
    alphabet = string.digits + "()+-*/ "

    def generate(length: int) -> str:
        return "".join(random.choices(alphabet, k=length))

    while True:
        code = generate(10)

        if re.findall(r"\*\s*\*", code) or re.findall(r"/\s*/", code):
            continue  # avoid generating powers (10**4) and python's int division (10 // 3)

        if re.findall(r"(^|[(+\-*/])\s*[+-]", code):
            continue  # unary operators exist only in python

        if re.findall(r"\d\s+\d|\)\s*\(|\d\s*\(|\)\s*\d", code):
            continue  # juxtaposed operands are a syntax error in python but leave extra stack values here

        res_py = eval_py(code)
        res_my = eval_my(code)
        if isinstance(res_py, int) and res_py == res_my:
            continue
        if isinstance(res_py, str) and isinstance(res_my, str):
            continue
        if isinstance(res_py, str) and res_py.startswith("leading zeros in decimal integer literals are not permitted"):
            continue
        print(f"{code!r}\npy: {res_py}\nmy: {res_my}\n\n")
