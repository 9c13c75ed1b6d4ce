"""Editing operations on :class:`InstructionSet` pairs.

The down sequence rolls an upgrade back and conceptually runs its effects in
reverse.  An instruction meant to run right before the commit point on the
way up therefore has to run right after it on the way down: for every
anchor-relative operation the down side uses the opposite anchor side, and
"loaded before" turns into "unloaded after".

Every function also accepts a bare sequence, in which case only the up-side
primitive is applied.  ``append``, ``append_after_point_of_no_return`` and
``insert_after_load_object_code`` are not anchor-relative and apply
identically to both sides.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Sequence, Tuple, Union

from . import boundary, editor, guard
from .anchors import Anchor
from .instruction import POINT_OF_NO_RETURN, Invoke
from .instruction_set import InstructionSet

Instructions = Union[InstructionSet, Sequence[Any]]
Edited = Union[InstructionSet, Tuple[Any, ...]]


def _mirrored(
    instructions: Instructions,
    forward: Callable[..., Tuple[Any, ...]],
    inverse: Callable[..., Tuple[Any, ...]],
    *args: Any,
) -> Edited:
    if isinstance(instructions, InstructionSet):
        return instructions.with_sides(
            forward(instructions.up, *args), inverse(instructions.down, *args)
        )
    return forward(instructions, *args)


def apply_to_both(
    instructions: Instructions, operation: Callable[..., Sequence[Any]], *args: Any
) -> Edited:
    """Apply a bare sequence ``operation`` unmirrored to both sides."""

    if isinstance(instructions, InstructionSet):
        return instructions.map(operation, *args)
    return tuple(operation(instructions, *args))


# ---------------------------------------------------------------------------
# anchor relative insertion
# ---------------------------------------------------------------------------


def insert_before_instruction(instructions: Instructions, new: Any, anchor: Anchor) -> Edited:
    """Insert ``new`` before ``anchor`` (after it on the down side)."""

    return _mirrored(
        instructions,
        lambda seq: editor.insert_before(seq, anchor, new),
        lambda seq: editor.insert_after(seq, anchor, new),
    )


def insert_after_instruction(instructions: Instructions, new: Any, anchor: Anchor) -> Edited:
    """Insert ``new`` after ``anchor`` (before it on the down side)."""

    return _mirrored(
        instructions,
        lambda seq: editor.insert_after(seq, anchor, new),
        lambda seq: editor.insert_before(seq, anchor, new),
    )


def insert_before_point_of_no_return(instructions: Instructions, new: Any) -> Edited:
    """Insert ``new`` right before the point of no return.

    A failing instruction before that point makes the upgrade fail, a failing
    instruction after it restarts the release.
    """

    return insert_before_instruction(instructions, new, POINT_OF_NO_RETURN)


def insert_after_point_of_no_return(instructions: Instructions, new: Any) -> Edited:
    """Insert ``new`` right after the point of no return.

    The inserted instructions are the first ones that must not fail, the
    release handler restarts the release if they do.
    """

    return insert_after_instruction(instructions, new, POINT_OF_NO_RETURN)


# ---------------------------------------------------------------------------
# unmirrored operations
# ---------------------------------------------------------------------------


def append(instructions: Instructions, new: Any) -> Edited:
    return apply_to_both(instructions, editor.append, new)


def append_after_point_of_no_return(instructions: Instructions, new: Any) -> Edited:
    return apply_to_both(instructions, boundary.append_after_point_of_no_return, new)


def insert_after_load_object_code(instructions: Instructions, new: Any) -> Edited:
    return apply_to_both(instructions, editor.insert_after_load_object_code, new)


# ---------------------------------------------------------------------------
# module load guards
# ---------------------------------------------------------------------------


def ensure_module_loaded_before_instruction(instructions: Instructions, target: Any, unit: str) -> Edited:
    return _mirrored(
        instructions,
        guard.ensure_module_loaded_before_instruction,
        guard.ensure_module_unloaded_after_instruction,
        target,
        unit,
    )


def ensure_module_unloaded_after_instruction(instructions: Instructions, target: Any, unit: str) -> Edited:
    return _mirrored(
        instructions,
        guard.ensure_module_unloaded_after_instruction,
        guard.ensure_module_loaded_before_instruction,
        target,
        unit,
    )


def ensure_module_loaded_before_first_runnable(
    instructions: Instructions, runnable: Invoke, unit: Optional[str] = None
) -> Edited:
    return _mirrored(
        instructions,
        guard.ensure_module_loaded_before_first_runnable,
        guard.ensure_module_unloaded_after_last_runnable,
        runnable,
        unit,
    )


def ensure_module_unloaded_after_last_runnable(
    instructions: Instructions, runnable: Invoke, unit: Optional[str] = None
) -> Edited:
    return _mirrored(
        instructions,
        guard.ensure_module_unloaded_after_last_runnable,
        guard.ensure_module_loaded_before_first_runnable,
        runnable,
        unit,
    )


__all__ = [
    "Instructions",
    "append",
    "append_after_point_of_no_return",
    "apply_to_both",
    "ensure_module_loaded_before_first_runnable",
    "ensure_module_loaded_before_instruction",
    "ensure_module_unloaded_after_instruction",
    "ensure_module_unloaded_after_last_runnable",
    "insert_after_instruction",
    "insert_after_load_object_code",
    "insert_after_point_of_no_return",
    "insert_before_instruction",
    "insert_before_point_of_no_return",
]
