"""Find the earliest safe insertion point after the point of no return.

Instructions appended after the commit marker should run before the release
handler starts to touch the running system.  The scanner therefore stops at
the first instruction that

* loads, unloads or purges code (``load_module``, ``add_module``, ``load``,
  ``remove``, ``purge``, ``delete_module``),
* updates, starts or stops processes (``update``, ``code_change``, ``start``,
  ``stop``), or
* (re)starts or stops applications or the emulator (``add_application``,
  ``remove_application``, ``restart_application``, ``restart_emulator``,
  ``restart_new_emulator``).

A load of unit ``U`` directly followed by ``Invoke(U, "run", _)`` is not a
boundary.  Runnable instructions insert that load themselves (see
:func:`relupedit.guard.ensure_module_loaded_before_first_runnable`) and the
pair carries no code of the release being installed.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Tuple

from .classifier import LOAD_INSTRUCTIONS, is_runnable, modifies_state
from .editor import as_batch
from .instruction import PointOfNoReturn

logger = logging.getLogger(__name__)


def append_after_point_of_no_return(sequence: Sequence[Any], new: Any) -> Tuple[Any, ...]:
    """Insert ``new`` after the marker but before the first state mutation.

    Without a marker, or without any mutating instruction after it, ``new``
    is appended at the tail.
    """

    items = tuple(sequence)
    batch = as_batch(new)
    index = _find_boundary(items)
    if index is None:
        logger.debug("no mutation boundary after point of no return; appending")
        return items + batch
    return items[:index] + batch + items[index:]


def _find_boundary(items: Tuple[Any, ...]) -> Optional[int]:
    marker = _find_marker(items)
    if marker is None:
        return None
    index = marker + 1
    while index < len(items):
        if _is_self_loading_pair(items, index):
            index += 2
            continue
        if modifies_state(items[index]):
            return index
        index += 1
    return None


def _find_marker(items: Tuple[Any, ...]) -> Optional[int]:
    for index, instruction in enumerate(items):
        if isinstance(instruction, PointOfNoReturn):
            return index
    return None


def _is_self_loading_pair(items: Tuple[Any, ...], index: int) -> bool:
    if index + 1 >= len(items):
        return False
    load = items[index]
    if not isinstance(load, LOAD_INSTRUCTIONS):
        return False
    return is_runnable(items[index + 1], load.module)


__all__ = ["append_after_point_of_no_return"]
