"""Anchor addressed insertion primitives on bare instruction sequences.

``new`` may be a single instruction or a list/tuple of instructions whose
order is preserved.  Native terms that are themselves tuples must be wrapped
in :class:`~relupedit.instruction.Opaque` before insertion, otherwise they are
read as a batch.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence, Tuple

from .anchors import Anchor, describe_anchor, last_load_object_code, locate

logger = logging.getLogger(__name__)


def as_batch(new: Any) -> Tuple[Any, ...]:
    """Return ``new`` as a tuple of instructions."""

    if isinstance(new, (list, tuple)):
        return tuple(new)
    return (new,)


def append(sequence: Sequence[Any], new: Any) -> Tuple[Any, ...]:
    return tuple(sequence) + as_batch(new)


def insert_before(sequence: Sequence[Any], anchor: Anchor, new: Any) -> Tuple[Any, ...]:
    """Insert ``new`` immediately before ``anchor``, appending if it is missing."""

    items = tuple(sequence)
    index = locate(items, anchor)
    if index is None:
        logger.debug("anchor %s not found; appending", describe_anchor(anchor))
        return items + as_batch(new)
    return items[:index] + as_batch(new) + items[index:]


def insert_after(sequence: Sequence[Any], anchor: Anchor, new: Any) -> Tuple[Any, ...]:
    """Insert ``new`` immediately after ``anchor``, appending if it is missing."""

    items = tuple(sequence)
    index = locate(items, anchor)
    if index is None:
        logger.debug("anchor %s not found; appending", describe_anchor(anchor))
        return items + as_batch(new)
    return items[: index + 1] + as_batch(new) + items[index + 1 :]


def insert_after_load_object_code(sequence: Sequence[Any], new: Any) -> Tuple[Any, ...]:
    """Insert ``new`` after the last ``load_object_code`` instruction.

    That instruction is usually one of the first of an upgrade and precedes
    the point of no return, so the inserted instructions are the first custom
    ones to run.  They run twice: once while the release handler checks
    whether the upgrade can be installed and once during the installation.
    """

    items = tuple(sequence)
    index = last_load_object_code(items)
    if index is None:
        logger.debug("no load_object_code instruction; appending")
        return items + as_batch(new)
    return items[: index + 1] + as_batch(new) + items[index + 1 :]


def remove_at(sequence: Sequence[Any], index: int) -> Tuple[Any, ...]:
    items = tuple(sequence)
    return items[:index] + items[index + 1 :]


__all__ = [
    "append",
    "as_batch",
    "insert_after",
    "insert_after_load_object_code",
    "insert_before",
    "remove_at",
]
