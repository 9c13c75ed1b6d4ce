"""Public package exports for the relup instruction editor."""

from .anchors import FirstRunnable, LastRunnable, locate
from .classifier import (
    InstructionCategory,
    classify_instruction,
    modifies_applications,
    modifies_code,
    modifies_processes,
)
from .config import RelupConfig
from .instruction import (
    AddApplication,
    AddModule,
    CodeChange,
    DeleteModule,
    Instruction,
    Invoke,
    Load,
    LoadModule,
    LoadObjectCode,
    Opaque,
    POINT_OF_NO_RETURN,
    PointOfNoReturn,
    Purge,
    Remove,
    RemoveApplication,
    RestartApplication,
    RestartEmulator,
    RestartNewEmulator,
    Start,
    Stop,
    Update,
    runnable,
)
from .instruction_set import InstructionSet
from .printer import InstructionSetRenderer
from .symmetry import (
    append,
    append_after_point_of_no_return,
    apply_to_both,
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
from .transform import RelupTransform, RunnableTransform

__all__ = [
    "AddApplication",
    "AddModule",
    "CodeChange",
    "DeleteModule",
    "FirstRunnable",
    "Instruction",
    "InstructionCategory",
    "InstructionSet",
    "InstructionSetRenderer",
    "Invoke",
    "LastRunnable",
    "Load",
    "LoadModule",
    "LoadObjectCode",
    "Opaque",
    "POINT_OF_NO_RETURN",
    "PointOfNoReturn",
    "Purge",
    "RelupConfig",
    "RelupTransform",
    "Remove",
    "RemoveApplication",
    "RestartApplication",
    "RestartEmulator",
    "RestartNewEmulator",
    "RunnableTransform",
    "Start",
    "Stop",
    "Update",
    "append",
    "append_after_point_of_no_return",
    "apply_to_both",
    "classify_instruction",
    "ensure_module_loaded_before_first_runnable",
    "ensure_module_loaded_before_instruction",
    "ensure_module_unloaded_after_instruction",
    "ensure_module_unloaded_after_last_runnable",
    "insert_after_instruction",
    "insert_after_load_object_code",
    "insert_after_point_of_no_return",
    "insert_before_instruction",
    "insert_before_point_of_no_return",
    "locate",
    "modifies_applications",
    "modifies_code",
    "modifies_processes",
    "runnable",
]
