"""Helpers to serialise instruction sets for offline inspection.

The encoding is a plain JSON mapping with an explicit ``op`` tag per
instruction, for example ``{"op": "load_module", "module": "Acme"}``.  It is
meant for fixtures and debugging, not for the release handler.

JSON has no tuple type.  Top level tuple fields are written as lists because
the instruction constructors turn them back into tuples.  Tuples nested
deeper, and tuples in fields kept verbatim such as ``Opaque.term``, are
written as ``{"__tuple__": [...]}`` so that a round trip preserves them.
"""

from __future__ import annotations

import json
from dataclasses import MISSING, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping

from .instruction import INSTRUCTION_TYPES, Instruction
from .instruction_set import InstructionSet

TUPLE_TAG = "__tuple__"


def serialize_instruction(instruction: Any) -> Dict[str, Any]:
    """Convert ``instruction`` into a mapping with an explicit type tag."""

    if not isinstance(instruction, Instruction):
        raise TypeError(
            f"unsupported instruction type: {type(instruction)!r} (wrap it in Opaque)"
        )
    payload: Dict[str, Any] = {"op": instruction.op}
    for item in fields(instruction):
        value = getattr(instruction, item.name)
        if item.default is not MISSING and value == item.default:
            continue
        if item.metadata.get("verbatim"):
            payload[item.name] = _to_json(value)
        elif isinstance(value, (list, tuple)):
            payload[item.name] = [_to_json(entry) for entry in value]
        else:
            payload[item.name] = _to_json(value)
    return payload


def deserialize_instruction(entry: Mapping[str, Any]) -> Instruction:
    """Rebuild an instruction from :func:`serialize_instruction` output."""

    if not isinstance(entry, Mapping):
        raise ValueError("instruction entry must be a JSON object")
    op = entry.get("op")
    cls = INSTRUCTION_TYPES.get(op)
    if cls is None:
        raise ValueError(f"unknown instruction op: {op!r}")
    names = {item.name for item in fields(cls)}
    unexpected = sorted(set(entry) - names - {"op"})
    if unexpected:
        raise ValueError(f"unexpected fields for {op}: {', '.join(unexpected)}")
    kwargs = {key: _from_json(value) for key, value in entry.items() if key != "op"}
    try:
        return cls(**kwargs)
    except TypeError as exc:
        raise ValueError(f"invalid {op} instruction: {exc}") from exc


def serialize_instruction_set(instructions: InstructionSet) -> Dict[str, List[Dict[str, Any]]]:
    return {
        "up": [serialize_instruction(instruction) for instruction in instructions.up],
        "down": [serialize_instruction(instruction) for instruction in instructions.down],
    }


def deserialize_instruction_set(payload: Mapping[str, Any]) -> InstructionSet:
    if not isinstance(payload, Mapping):
        raise ValueError("instruction set must be a JSON object")
    sides = {}
    for side in ("up", "down"):
        entries = payload.get(side, [])
        if not isinstance(entries, list):
            raise ValueError(f"instruction set '{side}' must be a list")
        sides[side] = [deserialize_instruction(entry) for entry in entries]
    return InstructionSet.from_sequences(sides["up"], sides["down"])


def load_instruction_set(path: Path) -> InstructionSet:
    return deserialize_instruction_set(json.loads(path.read_text("utf-8")))


def write_instruction_set(instructions: InstructionSet, path: Path, *, pretty: bool = True) -> None:
    payload = serialize_instruction_set(instructions)
    dumps = json.dumps(payload, indent=2 if pretty else None)
    path.write_text(dumps + "\n", "utf-8")


def _to_json(value: Any) -> Any:
    if isinstance(value, tuple):
        return {TUPLE_TAG: [_to_json(item) for item in value]}
    if isinstance(value, list):
        return [_to_json(item) for item in value]
    if isinstance(value, Mapping):
        return {str(key): _to_json(item) for key, item in value.items()}
    return value


def _from_json(value: Any) -> Any:
    if isinstance(value, list):
        return [_from_json(item) for item in value]
    if isinstance(value, Mapping):
        if set(value) == {TUPLE_TAG} and isinstance(value[TUPLE_TAG], list):
            return tuple(_from_json(item) for item in value[TUPLE_TAG])
        return {key: _from_json(item) for key, item in value.items()}
    return value


__all__ = [
    "deserialize_instruction",
    "deserialize_instruction_set",
    "load_instruction_set",
    "serialize_instruction",
    "serialize_instruction_set",
    "write_instruction_set",
]
