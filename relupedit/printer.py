"""Render instruction sets into a stable textual form."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, List, Sequence

from .classifier import InstructionCategory, classify_instruction
from .instruction import Instruction, PointOfNoReturn
from .instruction_set import InstructionSet

_CATEGORY_TAGS = {
    InstructionCategory.CODE: "code",
    InstructionCategory.PROCESSES: "proc",
    InstructionCategory.APPLICATIONS: "app",
    InstructionCategory.NEUTRAL: "",
}


class InstructionSetRenderer:
    """Render :class:`InstructionSet` instances one instruction per line.

    Each line carries the position, a short tag for the kind of state the
    instruction mutates and its description.  The point of no return is
    highlighted so diffs of edited sets are easy to follow.
    """

    def render(self, instructions: InstructionSet) -> str:
        lines: List[str] = []
        lines.extend(self._render_side("up", instructions.up))
        lines.append("")
        lines.extend(self._render_side("down", instructions.down))
        return "\n".join(lines) + "\n"

    def write(self, instructions: InstructionSet, output_path: Path) -> None:
        output_path.write_text(self.render(instructions), "utf-8")

    def _render_side(self, label: str, sequence: Sequence[Any]) -> Iterable[str]:
        yield f"; {label} ({len(sequence)} instructions)"
        if not sequence:
            yield ";   (empty)"
            return
        for index, instruction in enumerate(sequence):
            yield self._render_instruction(index, instruction)

    def _render_instruction(self, index: int, instruction: Any) -> str:
        if isinstance(instruction, PointOfNoReturn):
            return f"{index:4d}  ---- point_of_no_return ----"
        tag = _CATEGORY_TAGS[classify_instruction(instruction)]
        text = instruction.describe() if isinstance(instruction, Instruction) else repr(instruction)
        return f"{index:4d}  {tag:<4}  {text}".rstrip()


__all__ = ["InstructionSetRenderer"]
