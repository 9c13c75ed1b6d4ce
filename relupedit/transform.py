"""Extension contract for custom relup transformations.

A transformation receives the instruction set generated for a release
upgrade and returns an edited copy::

    class LogUpgrade(RelupTransform):
        def transform(self, instructions, config):
            message = Invoke("Logger", "info", ("upgraded",))
            return append_after_point_of_no_return(instructions, message)

Chaining transformations is left to the host.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Sequence

from .config import RelupConfig
from .instruction import Invoke, runnable
from .instruction_set import InstructionSet
from .symmetry import append_after_point_of_no_return, ensure_module_loaded_before_first_runnable


class RelupTransform(ABC):
    """Edits an :class:`InstructionSet` for a release upgrade."""

    @abstractmethod
    def transform(self, instructions: InstructionSet, config: RelupConfig) -> InstructionSet:
        raise NotImplementedError


class RunnableTransform(RelupTransform):
    """Transformation that runs custom logic of ``unit`` during the upgrade.

    The logic is dispatched as ``Invoke(unit, "run", arguments)``.  If the
    release loads ``unit`` itself, the load is moved in front of the first
    runnable on the way up and behind the last one on the way down so the
    code is available whenever the instruction executes.
    """

    unit: ClassVar[str] = ""

    def arguments(self, instructions: InstructionSet, config: RelupConfig) -> Sequence[Any]:
        return ()

    def insert(self, instructions: InstructionSet, instruction: Invoke) -> InstructionSet:
        return append_after_point_of_no_return(instructions, instruction)

    def runnable(self, instructions: InstructionSet, config: RelupConfig) -> Invoke:
        if not self.unit:
            raise ValueError(f"{type(self).__name__} does not define a unit")
        return runnable(self.unit, self.arguments(instructions, config))

    def transform(self, instructions: InstructionSet, config: RelupConfig) -> InstructionSet:
        instruction = self.runnable(instructions, config)
        updated = self.insert(instructions, instruction)
        return ensure_module_loaded_before_first_runnable(updated, instruction, self.unit)


__all__ = ["RelupTransform", "RunnableTransform"]
