"""Keep the load instruction of a unit next to the instructions that use it.

A runnable instruction calls into a unit's code, so that code has to be
loaded before the call on the way up and stay loaded until the call on the
way down has finished.  The guards below never create load instructions.
They only move an existing one that the release generator emitted at the
wrong place.

Use the ``*_instruction`` variants when the target occurs once per sequence
and the ``*_runnable`` variants when a runnable instruction may be inserted
several times.  Applying the runnable variants for the same unit with
different runnable patterns is not supported.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Tuple

from .anchors import FirstRunnable, LastRunnable, locate
from .classifier import is_load_instruction, is_unload_instruction
from .editor import insert_after, insert_before, remove_at
from .instruction import Invoke

logger = logging.getLogger(__name__)


def ensure_module_loaded_before_instruction(
    sequence: Sequence[Any], target: Any, unit: str
) -> Tuple[Any, ...]:
    """Move the first load of ``unit`` in front of ``target`` if it follows it.

    ``target`` is any anchor understood by :func:`~relupedit.anchors.locate`.
    """

    items = tuple(sequence)
    target_index = locate(items, target)
    for index, instruction in enumerate(items):
        if index == target_index or not is_load_instruction(instruction, unit):
            continue
        if target_index is None or index < target_index:
            return items
        logger.debug("moving load of %s before %r", unit, target)
        return insert_before(remove_at(items, index), target, instruction)
    return items


def ensure_module_unloaded_after_instruction(
    sequence: Sequence[Any], target: Any, unit: str
) -> Tuple[Any, ...]:
    """Move every unload of ``unit`` preceding ``target`` directly behind it."""

    items = tuple(sequence)
    target_index = locate(items, target)
    if target_index is None:
        return items
    return _move_behind(items, target_index, target, unit)


def ensure_module_loaded_before_first_runnable(
    sequence: Sequence[Any], runnable: Invoke, unit: Optional[str] = None
) -> Tuple[Any, ...]:
    """Move the first load of ``unit`` in front of the first ``runnable``.

    The runnable is matched as a pattern, ``Invoke(runnable.target, "run",
    _)``, so every insertion of the same runnable instruction counts
    regardless of its arguments.  ``unit`` defaults to the runnable's target.
    """

    anchor = FirstRunnable(runnable.target)
    unit = unit or runnable.target
    items = tuple(sequence)
    first = locate(items, anchor)
    for index, instruction in enumerate(items):
        if not is_load_instruction(instruction, unit):
            continue
        if first is None or index < first:
            return items
        logger.debug("moving load of %s before first runnable of %s", unit, runnable.target)
        return insert_before(remove_at(items, index), anchor, instruction)
    return items


def ensure_module_unloaded_after_last_runnable(
    sequence: Sequence[Any], runnable: Invoke, unit: Optional[str] = None
) -> Tuple[Any, ...]:
    """Move every unload of ``unit`` preceding the last ``runnable`` behind it."""

    anchor = LastRunnable(runnable.target)
    unit = unit or runnable.target
    items = tuple(sequence)
    last = locate(items, anchor)
    if last is None:
        return items
    return _move_behind(items, last, anchor, unit)


def _move_behind(items: Tuple[Any, ...], index: int, anchor: Any, unit: str) -> Tuple[Any, ...]:
    misplaced: List[int] = [
        position for position in range(index) if is_unload_instruction(items[position], unit)
    ]
    if not misplaced:
        return items
    logger.debug("moving %d unload instruction(s) of %s", len(misplaced), unit)
    moved = tuple(items[position] for position in misplaced)
    skipped = set(misplaced)
    kept = tuple(item for position, item in enumerate(items) if position not in skipped)
    return insert_after(kept, anchor, moved)


__all__ = [
    "ensure_module_loaded_before_first_runnable",
    "ensure_module_loaded_before_instruction",
    "ensure_module_unloaded_after_instruction",
    "ensure_module_unloaded_after_last_runnable",
]
