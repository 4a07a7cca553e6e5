from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, TypeVar


class _HasRole(Protocol):
    role: str


T = TypeVar("T", bound=_HasRole)


def sanitize_history(turns: Sequence[T]) -> list[T]:
    """
    Enforce the alternation the completion service requires.

    - Two adjacent user turns never survive: the later one replaces the earlier
      (the earlier is treated as an abandoned attempt).
    - The result never ends with a user turn, because the gateway is about to
      append one.

    Pure and total: `[]` -> `[]`, a valid sequence comes back unchanged.
    """
    out: list[T] = []
    for turn in turns:
        if turn.role == "user" and out and out[-1].role == "user":
            out.pop()
        out.append(turn)
    if out and out[-1].role == "user":
        out.pop()
    return out
