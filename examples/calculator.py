"""Calculator example for parsecengine.

A right-associative infix calculator without operator precedence:
"2*3+4" evaluates as 2*(3+4). Parentheses group as usual.

Demonstrates:

1. Grammar rules as @rule methods on a ParserEngine subclass
2. Greedy alternation with choice_longest
3. Rejecting input from inside a rule with self.failure()
4. Reusing one engine for many lines via reset()
5. Caret-annotated error output with format_with_context()

Run without arguments for a REPL, or pass expressions as arguments:
    python examples/calculator.py "1+2" "(1+2)*3"

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys

from parsecengine import ParseFailure, Parser, ParserEngine, rule

NUMBER = r"-?\d+(\.\d+)?(E-?\d+)?"


class Calculator(ParserEngine):
    """Evaluates expressions while parsing them."""

    @rule
    def expression(self) -> Parser[float]:
        return self.choice_longest([self.number(), self.parenthesized(), self.operation()])

    @rule
    def number(self) -> Parser[float]:
        return self.pattern(NUMBER).map(float)

    @rule
    def parenthesized(self) -> Parser[float]:
        inner = self.sequence([self.char("("), self.expression(), self.char(")")])
        return inner.map(lambda parts: parts[1])

    @rule
    def operation(self) -> Parser[float]:
        operand = self.choice([self.parenthesized(), self.number()])
        parts = self.sequence([operand, self.operator(), self.expression()])

        def evaluate() -> float:
            left, op, right = parts()
            match op:
                case "+":
                    return left + right
                case "-":
                    return left - right
                case "*":
                    return left * right
                case "/":
                    if right == 0:
                        raise self.failure("Division by zero")
                    return left / right
                case _:
                    raise self.failure(f"Invalid operator: {op}")

        return Parser(evaluate, "operation")

    @rule
    def operator(self) -> Parser[str]:
        return self.pattern(r"[^\d\s().]")


def evaluate_line(calculator: Calculator, line: str) -> str:
    """Evaluate one line and return the text to print."""
    try:
        return f"# {calculator.parse(calculator.expression(), line.strip())}"
    except ParseFailure as e:
        return e.format_with_context()


def main(argv: list[str]) -> int:
    logging.basicConfig(level=logging.WARNING)
    calculator = Calculator()

    if argv:
        for line in argv:
            print(evaluate_line(calculator, line))
        return 0

    while True:
        try:
            line = input("> ")
        except EOFError:
            print()
            return 0
        if line.strip():
            print(evaluate_line(calculator, line))


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
