"""Plain sequential definition of bracket balance.

This is the computation the bracket circuit arithmetizes; tests use it as the
oracle the backend's verdict must agree with.
"""

from typing import List


def is_valid_brackets(s: str) -> bool:
    """True when s is balanced and no prefix closes more than it opens.

    Raises:
        ValueError: If s contains a character other than '(' or ')'
    """
    acc = 0
    for c in s:
        if c == "(":
            acc += 1
        elif c == ")":
            if acc == 0:
                return False
            acc -= 1
        else:
            raise ValueError(f"not allowed symbol: {c!r}")
    return acc == 0


def running_balances(s: str) -> List[int]:
    """Signed balance after each character: +1 per '(' and -1 per ')'."""
    balances = []
    acc = 0
    for c in s:
        acc += 1 if c == "(" else -1
        balances.append(acc)
    return balances
