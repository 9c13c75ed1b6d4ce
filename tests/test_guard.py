from relupedit.anchors import FirstRunnable
from relupedit.guard import (
    ensure_module_loaded_before_first_runnable,
    ensure_module_loaded_before_instruction,
    ensure_module_unloaded_after_instruction,
    ensure_module_unloaded_after_last_runnable,
)
from relupedit.instruction import (
    POINT_OF_NO_RETURN,
    AddModule,
    DeleteModule,
    Invoke,
    Load,
    LoadModule,
    Purge,
    Update,
    runnable,
)


TARGET = runnable("Acme.Migrate", ["x"])


def test_load_already_before_target_is_kept() -> None:
    sequence = (LoadModule("Acme.Migrate"), POINT_OF_NO_RETURN, TARGET, Update("B"))
    assert ensure_module_loaded_before_instruction(sequence, TARGET, "Acme.Migrate") == sequence


def test_load_after_target_is_relocated() -> None:
    sequence = [POINT_OF_NO_RETURN, TARGET, Update("B"), LoadModule("Acme.Migrate")]
    assert ensure_module_loaded_before_instruction(sequence, TARGET, "Acme.Migrate") == (
        POINT_OF_NO_RETURN,
        LoadModule("Acme.Migrate"),
        TARGET,
        Update("B"),
    )


def test_missing_load_is_not_fabricated() -> None:
    sequence = (POINT_OF_NO_RETURN, TARGET, LoadModule("Other"))
    assert ensure_module_loaded_before_instruction(sequence, TARGET, "Acme.Migrate") == sequence


def test_load_guard_uses_explicit_unit() -> None:
    target = Invoke("Logger", "info", ["x"])
    sequence = [target, Load("Acme.Log")]
    assert ensure_module_loaded_before_instruction(sequence, target, "Acme.Log") == (
        Load("Acme.Log"),
        target,
    )


def test_load_guard_is_idempotent() -> None:
    sequence = [POINT_OF_NO_RETURN, TARGET, AddModule("Acme.Migrate"), Update("B")]
    once = ensure_module_loaded_before_instruction(sequence, TARGET, "Acme.Migrate")
    twice = ensure_module_loaded_before_instruction(once, TARGET, "Acme.Migrate")
    assert once == twice
    assert once.index(AddModule("Acme.Migrate")) == once.index(TARGET) - 1


def test_unload_before_target_is_moved_behind_it() -> None:
    sequence = [LoadModule("Acme.Migrate"), POINT_OF_NO_RETURN, TARGET, Update("B")]
    assert ensure_module_unloaded_after_instruction(sequence, TARGET, "Acme.Migrate") == (
        POINT_OF_NO_RETURN,
        TARGET,
        LoadModule("Acme.Migrate"),
        Update("B"),
    )


def test_all_misplaced_unloads_are_moved_in_order() -> None:
    sequence = [DeleteModule("Acme.Migrate"), Purge(["Acme.Migrate"]), TARGET, Update("B")]
    result = ensure_module_unloaded_after_instruction(sequence, TARGET, "Acme.Migrate")
    assert result == (TARGET, DeleteModule("Acme.Migrate"), Purge(["Acme.Migrate"]), Update("B"))
    assert ensure_module_unloaded_after_instruction(result, TARGET, "Acme.Migrate") == result


def test_unload_guard_without_target_is_a_no_op() -> None:
    sequence = (LoadModule("Acme.Migrate"), Update("B"))
    assert ensure_module_unloaded_after_instruction(sequence, TARGET, "Acme.Migrate") == sequence


def test_load_moves_before_first_runnable_occurrence() -> None:
    first = runnable("Acme.Migrate", [1])
    second = runnable("Acme.Migrate", [2])
    sequence = [POINT_OF_NO_RETURN, first, Update("B"), second, LoadModule("Acme.Migrate")]

    result = ensure_module_loaded_before_first_runnable(sequence, second)

    assert result == (
        POINT_OF_NO_RETURN,
        LoadModule("Acme.Migrate"),
        first,
        Update("B"),
        second,
    )
    assert ensure_module_loaded_before_first_runnable(result, second) == result


def test_load_between_runnables_is_relocated() -> None:
    first = runnable("Acme.Migrate", [1])
    sequence = [first, LoadModule("Acme.Migrate"), first]
    assert ensure_module_loaded_before_first_runnable(sequence, first) == (
        LoadModule("Acme.Migrate"),
        first,
        first,
    )


def test_first_runnable_guard_without_runnable_is_a_no_op() -> None:
    sequence = (POINT_OF_NO_RETURN, LoadModule("Acme.Migrate"))
    assert ensure_module_loaded_before_first_runnable(sequence, TARGET) == sequence


def test_unloads_move_behind_last_runnable_occurrence() -> None:
    first = runnable("Acme.Migrate", [1])
    second = runnable("Acme.Migrate", [2])
    sequence = [
        LoadModule("Acme.Migrate"),
        first,
        Update("B"),
        Purge(["Acme.Migrate"]),
        second,
        Update("C"),
    ]

    result = ensure_module_unloaded_after_last_runnable(sequence, first)

    assert result == (
        first,
        Update("B"),
        second,
        LoadModule("Acme.Migrate"),
        Purge(["Acme.Migrate"]),
        Update("C"),
    )
    assert ensure_module_unloaded_after_last_runnable(result, first) == result


def test_runnable_guards_accept_a_separate_unit() -> None:
    sequence = [runnable("Acme.Migrate"), LoadModule("Acme.Helpers")]
    assert ensure_module_loaded_before_first_runnable(
        sequence, runnable("Acme.Migrate"), "Acme.Helpers"
    ) == (LoadModule("Acme.Helpers"), runnable("Acme.Migrate"))


def test_load_guard_locates_pattern_target() -> None:
    sequence = [POINT_OF_NO_RETURN, runnable("Acme.Migrate", [1]), LoadModule("Acme.Migrate")]
    result = ensure_module_loaded_before_instruction(
        sequence, FirstRunnable("Acme.Migrate"), "Acme.Migrate"
    )
    assert result == (POINT_OF_NO_RETURN, LoadModule("Acme.Migrate"), runnable("Acme.Migrate", [1]))
    assert (
        ensure_module_loaded_before_instruction(result, FirstRunnable("Acme.Migrate"), "Acme.Migrate")
        == result
    )
