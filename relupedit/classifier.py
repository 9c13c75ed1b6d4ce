"""Classify instructions by the kind of runtime state they mutate."""

from __future__ import annotations

from enum import Enum, auto
from typing import Any, Optional

from .instruction import (
    AddApplication,
    AddModule,
    CodeChange,
    DeleteModule,
    Invoke,
    Load,
    LoadModule,
    Purge,
    Remove,
    RemoveApplication,
    RestartApplication,
    RestartEmulator,
    RestartNewEmulator,
    RUN_SELECTOR,
    Start,
    Stop,
    Update,
)


CODE_INSTRUCTIONS = (LoadModule, AddModule, Load, Remove, Purge, DeleteModule)
PROCESS_INSTRUCTIONS = (Update, CodeChange, Start, Stop)
APPLICATION_INSTRUCTIONS = (
    AddApplication,
    RemoveApplication,
    RestartApplication,
    RestartEmulator,
    RestartNewEmulator,
)

LOAD_INSTRUCTIONS = (LoadModule, AddModule, Load)


class InstructionCategory(Enum):
    """Exclusive summary of the classifier predicates."""

    CODE = auto()
    PROCESSES = auto()
    APPLICATIONS = auto()
    NEUTRAL = auto()


def modifies_code(instruction: Any) -> bool:
    """Return ``True`` for instructions loading, unloading or purging code."""

    return isinstance(instruction, CODE_INSTRUCTIONS)


def modifies_processes(instruction: Any) -> bool:
    """Return ``True`` for instructions that update, start or stop processes."""

    return isinstance(instruction, PROCESS_INSTRUCTIONS)


def modifies_applications(instruction: Any) -> bool:
    """Return ``True`` for instructions that (re)start or stop applications or
    restart the emulator."""

    return isinstance(instruction, APPLICATION_INSTRUCTIONS)


def modifies_state(instruction: Any) -> bool:
    return (
        modifies_code(instruction)
        or modifies_processes(instruction)
        or modifies_applications(instruction)
    )


def classify_instruction(instruction: Any) -> InstructionCategory:
    """Return the :class:`InstructionCategory` of ``instruction``.

    Anything outside the modelled instruction families, including
    :class:`~relupedit.instruction.Opaque` wrappers and foreign values, is
    ``NEUTRAL``.
    """

    if modifies_code(instruction):
        return InstructionCategory.CODE
    if modifies_processes(instruction):
        return InstructionCategory.PROCESSES
    if modifies_applications(instruction):
        return InstructionCategory.APPLICATIONS
    return InstructionCategory.NEUTRAL


def is_load_instruction(instruction: Any, unit: str) -> bool:
    """Return ``True`` if ``instruction`` loads the code of ``unit``."""

    return isinstance(instruction, LOAD_INSTRUCTIONS) and instruction.module == unit


def is_unload_instruction(instruction: Any, unit: str) -> bool:
    """Return ``True`` if ``instruction`` replaces or drops the code of ``unit``.

    Load instructions count as well: on the way down the previous version of a
    unit is loaded over the current one, which unloads the current code.
    """

    if is_load_instruction(instruction, unit):
        return True
    if isinstance(instruction, (Remove, DeleteModule)):
        return instruction.module == unit
    if isinstance(instruction, Purge):
        return unit in instruction.modules
    return False


def is_runnable(instruction: Any, unit: Optional[str] = None) -> bool:
    """Return ``True`` for ``Invoke(unit, "run", _)``.

    Without ``unit`` any runnable instruction matches.
    """

    if not isinstance(instruction, Invoke) or instruction.selector != RUN_SELECTOR:
        return False
    return unit is None or instruction.target == unit


__all__ = [
    "APPLICATION_INSTRUCTIONS",
    "CODE_INSTRUCTIONS",
    "InstructionCategory",
    "LOAD_INSTRUCTIONS",
    "PROCESS_INSTRUCTIONS",
    "classify_instruction",
    "is_load_instruction",
    "is_runnable",
    "is_unload_instruction",
    "modifies_applications",
    "modifies_code",
    "modifies_processes",
    "modifies_state",
]
