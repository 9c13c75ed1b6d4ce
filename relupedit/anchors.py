"""Locate anchor positions inside an instruction sequence.

An anchor is either a literal instruction, compared structurally, or one of
the runnable patterns :class:`FirstRunnable` / :class:`LastRunnable` which
match ``Invoke(unit, "run", _)`` regardless of the arguments.  Failing to find
an anchor is a regular outcome signalled by ``None``; each editing operation
decides on its own fallback.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

from .classifier import is_runnable
from .instruction import Instruction, Invoke, LoadObjectCode


@dataclass(frozen=True)
class FirstRunnable:
    """First occurrence of ``Invoke(unit, "run", _)``."""

    unit: str


@dataclass(frozen=True)
class LastRunnable:
    """Last occurrence of ``Invoke(unit, "run", _)``."""

    unit: str


Anchor = Union[Instruction, FirstRunnable, LastRunnable, Any]


def locate(sequence: Sequence[Any], anchor: Anchor) -> Optional[int]:
    """Return the index of ``anchor`` in ``sequence`` or ``None``."""

    if isinstance(anchor, FirstRunnable):
        for index, instruction in enumerate(sequence):
            if is_runnable(instruction, anchor.unit):
                return index
        return None
    if isinstance(anchor, LastRunnable):
        # forward pass, remembering the latest match
        found: Optional[int] = None
        for index, instruction in enumerate(sequence):
            if is_runnable(instruction, anchor.unit):
                found = index
        return found
    for index, instruction in enumerate(sequence):
        if instruction == anchor:
            return index
    return None


def first_runnable_instruction(sequence: Sequence[Any], unit: str) -> Optional[Invoke]:
    """Return the first runnable instruction implemented by ``unit``."""

    index = locate(sequence, FirstRunnable(unit))
    return None if index is None else sequence[index]


def last_runnable_instruction(sequence: Sequence[Any], unit: str) -> Optional[Invoke]:
    """Return the last runnable instruction implemented by ``unit``."""

    index = locate(sequence, LastRunnable(unit))
    return None if index is None else sequence[index]


def last_load_object_code(sequence: Sequence[Any]) -> Optional[int]:
    """Return the index of the last :class:`LoadObjectCode` instruction."""

    found: Optional[int] = None
    for index, instruction in enumerate(sequence):
        if isinstance(instruction, LoadObjectCode):
            found = index
    return found


def describe_anchor(anchor: Anchor) -> str:
    if isinstance(anchor, FirstRunnable):
        return f"first runnable of {anchor.unit}"
    if isinstance(anchor, LastRunnable):
        return f"last runnable of {anchor.unit}"
    if isinstance(anchor, Instruction):
        return anchor.describe()
    return repr(anchor)


__all__ = [
    "Anchor",
    "FirstRunnable",
    "LastRunnable",
    "describe_anchor",
    "first_runnable_instruction",
    "last_load_object_code",
    "last_runnable_instruction",
    "locate",
]
