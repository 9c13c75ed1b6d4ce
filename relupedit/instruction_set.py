"""Paired upgrade/downgrade instruction sequences."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, Sequence, Tuple


InstructionSequence = Tuple[Any, ...]


@dataclass(frozen=True)
class InstructionSet:
    """The ``up`` sequence upgrades to the new release, ``down`` reverts it.

    Both sides are stored as tuples.  Editing helpers never mutate an
    instance; they build a new one through :meth:`with_sides`.
    """

    up: InstructionSequence = ()
    down: InstructionSequence = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "up", tuple(self.up))
        object.__setattr__(self, "down", tuple(self.down))

    @classmethod
    def from_sequences(cls, up: Iterable[Any], down: Iterable[Any]) -> "InstructionSet":
        return cls(up=tuple(up), down=tuple(down))

    def with_sides(self, up: Sequence[Any], down: Sequence[Any]) -> "InstructionSet":
        return replace(self, up=tuple(up), down=tuple(down))

    def map(self, operation: Callable[..., Sequence[Any]], *args: Any) -> "InstructionSet":
        """Apply the same sequence ``operation`` to both sides."""

        return self.with_sides(operation(self.up, *args), operation(self.down, *args))


__all__ = ["InstructionSequence", "InstructionSet"]
