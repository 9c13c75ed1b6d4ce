#!/usr/bin/env python3
"""Command-line interface for editing relup instruction sets stored as JSON."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from relupedit import (
    FirstRunnable,
    InstructionSet,
    InstructionSetRenderer,
    LastRunnable,
    append,
    append_after_point_of_no_return,
    ensure_module_loaded_before_first_runnable,
    ensure_module_loaded_before_instruction,
    ensure_module_unloaded_after_instruction,
    ensure_module_unloaded_after_last_runnable,
    insert_after_instruction,
    insert_after_load_object_code,
    insert_after_point_of_no_return,
    insert_before_instruction,
    insert_before_point_of_no_return,
)
from relupedit.instruction import Invoke
from relupedit.serialize import (
    deserialize_instruction,
    load_instruction_set,
    write_instruction_set,
)

logger = logging.getLogger("relup_edit")

INSERT_OPERATIONS: Dict[str, Callable[[InstructionSet, Any], InstructionSet]] = {
    "append": append,
    "append-after-point-of-no-return": append_after_point_of_no_return,
    "insert-after-load-object-code": insert_after_load_object_code,
    "insert-before-point-of-no-return": insert_before_point_of_no_return,
    "insert-after-point-of-no-return": insert_after_point_of_no_return,
}

ANCHORED_OPERATIONS = {
    "insert-before": insert_before_instruction,
    "insert-after": insert_after_instruction,
}

GUARD_OPERATIONS = {
    "ensure-loaded-before": ensure_module_loaded_before_instruction,
    "ensure-unloaded-after": ensure_module_unloaded_after_instruction,
}

RUNNABLE_GUARD_OPERATIONS = {
    "ensure-loaded-before-first-runnable": ensure_module_loaded_before_first_runnable,
    "ensure-unloaded-after-last-runnable": ensure_module_unloaded_after_last_runnable,
}

OPERATIONS = sorted(
    set(INSERT_OPERATIONS)
    | set(ANCHORED_OPERATIONS)
    | set(GUARD_OPERATIONS)
    | set(RUNNABLE_GUARD_OPERATIONS)
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    show = subparsers.add_parser("show", help="render an instruction set as text")
    show.add_argument("input", type=Path, help="Instruction set JSON file")

    edit = subparsers.add_parser("edit", help="apply a single editing operation")
    edit.add_argument("input", type=Path, help="Instruction set JSON file")
    edit.add_argument("--operation", required=True, choices=OPERATIONS)
    edit.add_argument(
        "--instruction",
        action="append",
        dest="instructions",
        default=[],
        help="JSON encoded instruction to insert; may be repeated",
    )
    edit.add_argument(
        "--anchor",
        default=None,
        help="JSON encoded anchor or guard target instruction",
    )
    edit.add_argument(
        "--first-runnable",
        default=None,
        help="Use the first runnable instruction of this unit as anchor",
    )
    edit.add_argument(
        "--last-runnable",
        default=None,
        help="Use the last runnable instruction of this unit as anchor",
    )
    edit.add_argument("--unit", default=None, help="Unit guarded by ensure-* operations")
    edit.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Where to write the edited set (defaults to overwriting the input)",
    )
    return parser.parse_args()


def load_input(path: Path) -> InstructionSet:
    if not path.exists():
        raise SystemExit(f"missing input file: {path}")
    try:
        return load_instruction_set(path)
    except ValueError as exc:
        raise SystemExit(f"invalid instruction set {path}: {exc}")


def parse_instruction(text: str) -> Any:
    try:
        return deserialize_instruction(json.loads(text))
    except ValueError as exc:
        raise SystemExit(f"invalid instruction {text!r}: {exc}")


def resolve_anchor(args: argparse.Namespace) -> Optional[Any]:
    if args.first_runnable:
        return FirstRunnable(args.first_runnable)
    if args.last_runnable:
        return LastRunnable(args.last_runnable)
    if args.anchor:
        return parse_instruction(args.anchor)
    return None


def apply_operation(instructions: InstructionSet, args: argparse.Namespace) -> InstructionSet:
    operation = args.operation
    new: List[Any] = [parse_instruction(text) for text in args.instructions]

    if operation in INSERT_OPERATIONS or operation in ANCHORED_OPERATIONS:
        if not new:
            raise SystemExit(f"{operation} requires at least one --instruction")
        if operation in INSERT_OPERATIONS:
            return INSERT_OPERATIONS[operation](instructions, new)
        anchor = resolve_anchor(args)
        if anchor is None:
            raise SystemExit(f"{operation} requires an anchor")
        return ANCHORED_OPERATIONS[operation](instructions, new, anchor)

    target = resolve_anchor(args)
    if operation in GUARD_OPERATIONS:
        if target is None or args.unit is None:
            raise SystemExit(f"{operation} requires --anchor and --unit")
        return GUARD_OPERATIONS[operation](instructions, target, args.unit)

    if not isinstance(target, Invoke):
        raise SystemExit(f"{operation} requires a runnable --anchor instruction")
    return RUNNABLE_GUARD_OPERATIONS[operation](instructions, target, args.unit)


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    instructions = load_input(args.input)
    if args.command == "show":
        print(InstructionSetRenderer().render(instructions), end="")
        return

    updated = apply_operation(instructions, args)
    output_path = args.output or args.input
    write_instruction_set(updated, output_path)
    logger.info("applied %s to %s", args.operation, args.input)
    print(f"instruction set written to {output_path}")


if __name__ == "__main__":
    main()
