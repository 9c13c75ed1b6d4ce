import pytest

from relupedit.classifier import (
    InstructionCategory,
    classify_instruction,
    is_load_instruction,
    is_runnable,
    is_unload_instruction,
    modifies_applications,
    modifies_code,
    modifies_processes,
    modifies_state,
)
from relupedit.instruction import (
    POINT_OF_NO_RETURN,
    AddApplication,
    AddModule,
    CodeChange,
    DeleteModule,
    Invoke,
    Load,
    LoadModule,
    LoadObjectCode,
    Opaque,
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


CODE = [
    LoadModule("A"),
    LoadModule("A", dep_mods=["B"]),
    LoadModule("A", "soft_purge", "soft_purge", ["B"]),
    AddModule("A"),
    AddModule("A", ["B"]),
    Load("A", "soft_purge", "brutal_purge"),
    Remove("A", "brutal_purge", "brutal_purge"),
    Purge(["A"]),
    DeleteModule("A"),
    DeleteModule("A", ["B"]),
]

PROCESSES = [
    Update("A"),
    Update("A", mod_type="supervisor"),
    Update("A", change="soft", dep_mods=["B"]),
    Update("A", ("advanced", []), 5000, "dynamic", "soft_purge", "soft_purge", ["B"]),
    CodeChange([("A", [])]),
    CodeChange([("A", [])], mode="up"),
    Start(["A"]),
    Stop(["A"]),
]

APPLICATIONS = [
    AddApplication("acme"),
    AddApplication("acme", "permanent"),
    RemoveApplication("acme"),
    RestartApplication("acme"),
    RestartEmulator(),
    RestartNewEmulator(),
]

NEUTRAL = [
    POINT_OF_NO_RETURN,
    LoadObjectCode("acme", "1.1.0", ["A"]),
    Invoke("Logger", "info", ["x"]),
    runnable("A"),
    Opaque(("apply", ("A", "b", []))),
    ("load_module", "A"),
    "restart_emulator",
    None,
]


@pytest.mark.parametrize("instruction", CODE)
def test_code_instructions(instruction) -> None:
    assert modifies_code(instruction)
    assert not modifies_processes(instruction)
    assert not modifies_applications(instruction)
    assert classify_instruction(instruction) is InstructionCategory.CODE


@pytest.mark.parametrize("instruction", PROCESSES)
def test_process_instructions(instruction) -> None:
    assert modifies_processes(instruction)
    assert not modifies_code(instruction)
    assert not modifies_applications(instruction)
    assert classify_instruction(instruction) is InstructionCategory.PROCESSES


@pytest.mark.parametrize("instruction", APPLICATIONS)
def test_application_instructions(instruction) -> None:
    assert modifies_applications(instruction)
    assert not modifies_code(instruction)
    assert not modifies_processes(instruction)
    assert classify_instruction(instruction) is InstructionCategory.APPLICATIONS


@pytest.mark.parametrize("instruction", NEUTRAL)
def test_unrecognised_instructions_are_neutral(instruction) -> None:
    assert not modifies_code(instruction)
    assert not modifies_processes(instruction)
    assert not modifies_applications(instruction)
    assert not modifies_state(instruction)
    assert classify_instruction(instruction) is InstructionCategory.NEUTRAL


def test_load_matcher_covers_load_families_only() -> None:
    assert is_load_instruction(LoadModule("A"), "A")
    assert is_load_instruction(AddModule("A", ["B"]), "A")
    assert is_load_instruction(Load("A"), "A")
    assert not is_load_instruction(LoadModule("B"), "A")
    assert not is_load_instruction(Remove("A"), "A")
    assert not is_load_instruction(DeleteModule("A"), "A")


def test_unload_matcher_includes_loads_and_removals() -> None:
    for instruction in (LoadModule("A"), Load("A"), Remove("A"), DeleteModule("A"), Purge(["A"])):
        assert is_unload_instruction(instruction, "A")
    assert not is_unload_instruction(Purge(["B"]), "A")
    assert not is_unload_instruction(Update("A"), "A")
    assert not is_unload_instruction(runnable("A"), "A")


def test_runnable_matcher() -> None:
    assert is_runnable(runnable("A", [1]), "A")
    assert is_runnable(runnable("A"))
    assert not is_runnable(runnable("A"), "B")
    assert not is_runnable(Invoke("A", "info", []), "A")
    assert not is_runnable(LoadModule("A"), "A")
