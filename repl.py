import logging
import os

from stackcalc.api import calculate
from stackcalc.utils import CalculatorError


def respond(line: str) -> bool:
    """Handles one input line, returns True when the loop should stop"""
    if line == "exit":
        print("Exiting ...")
        return True

    try:
        result = calculate(line)
    except CalculatorError as e:
        print(e)
        return False

    print(f"result> {line} = {result}")
    return False


if __name__ == "__main__":
    logging.basicConfig(
        level=os.environ.get("STACKCALC_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    print("Execute a calculation on a rough mini EVM calculator")
    print('You can only use + * - / ( ) and numeric characters. Enter "exit" to exit\n')

    while True:
        try:
            line = input("EVM calculator> ").strip()
        except EOFError:
            break

        if not line:
            continue

        if respond(line):
            break
