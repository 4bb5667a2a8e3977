from stackcalc.bytecode import disassemble, generate
from stackcalc.parser import ParserError, parse
from stackcalc.runtime import CalcRuntimeError, execute
from stackcalc.tokenizer import TokenizerError, tokenize

for code in [
    "5",
    "1 + 1",
    "4 + 6 * 3",
    "(4 + 6)",
    "(4+6) * 3",
    "156 + 4 * 3 / 2",
    "(156 + 4) * 3 / 2",
    "10 - 3 - 2",
    "7/6/2000",
    "5^2",
    "(1 + 2",
    "1 + 2)",
    "1 +",
    "1 - 2",
    "1 / 0",
]:
    print("=" * 10)
    print(f"code: {code!r}")
    try:
        tokens = tokenize(code)
    except TokenizerError as e:
        print(e)
        continue

    print(f"tokens: {' '.join(str(t) for t in tokens if str(t))}")

    try:
        prefix = parse(tokens)
    except ParserError as e:
        print(e)
        continue
    print(f"prefix notation: {prefix}")

    bytecode = generate(prefix)
    print(f"bytecode: {bytecode}")
    listing = "\n".join(f"  {line}" for line in disassemble(bytecode).splitlines())
    print(f"disassembly:\n{listing}")

    try:
        result = execute(bytecode)
    except CalcRuntimeError as e:
        print(f"runtime error: {e}")
        continue
    print(f"result: {result}")
