"""Dataclasses describing hot-upgrade instructions.

Every instruction family of the release handler is represented by a single
frozen dataclass.  The native format encodes optional metadata (purge modes,
dependency lists, timeouts) through different tuple arities; here the optional
parts are regular fields with ``None`` or empty defaults so that one class
covers every arity of a family.  All list-like payloads are normalised to
tuples which keeps the instances hashable and makes structural comparison in
tests trivial.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Tuple


RUN_SELECTOR = "run"


def _as_tuple(values: Iterable[Any]) -> Tuple[Any, ...]:
    if isinstance(values, tuple):
        return values
    if isinstance(values, (str, bytes)):
        return (values,)
    return tuple(values)


def _render_args(values: Iterable[Any]) -> str:
    return ", ".join(repr(value) for value in values)


@dataclass(frozen=True)
class Instruction:
    """Base class for upgrade instructions.

    Subclasses are frozen dataclasses which makes equality structural.  The
    anchor locator relies on this: a literal anchor matches the first element
    that compares equal to it.
    """

    @property
    def op(self) -> str:
        return _OP_NAMES.get(type(self), type(self).__name__.lower())

    def describe(self) -> str:
        return self.op


@dataclass(frozen=True)
class PointOfNoReturn(Instruction):
    """Commit marker.  Failures after it restart the node."""


@dataclass(frozen=True)
class LoadObjectCode(Instruction):
    """Load the object code of ``modules`` without touching running code."""

    library: str
    version: str
    modules: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "modules", _as_tuple(self.modules))

    def describe(self) -> str:
        modules = ", ".join(self.modules)
        return f"{self.op} {self.library} {self.version} [{modules}]"


# ---------------------------------------------------------------------------
# code mutating instructions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LoadModule(Instruction):
    module: str
    pre_purge: Optional[str] = None
    post_purge: Optional[str] = None
    dep_mods: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "dep_mods", _as_tuple(self.dep_mods))

    def describe(self) -> str:
        return _describe_module(self.op, self.module, self.pre_purge, self.post_purge, self.dep_mods)


@dataclass(frozen=True)
class AddModule(Instruction):
    module: str
    dep_mods: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "dep_mods", _as_tuple(self.dep_mods))

    def describe(self) -> str:
        return _describe_module(self.op, self.module, None, None, self.dep_mods)


@dataclass(frozen=True)
class Load(Instruction):
    """Low level load of new code for ``module``."""

    module: str
    pre_purge: str = "brutal_purge"
    post_purge: str = "brutal_purge"

    def describe(self) -> str:
        return _describe_module(self.op, self.module, self.pre_purge, self.post_purge, ())


@dataclass(frozen=True)
class Remove(Instruction):
    module: str
    pre_purge: str = "brutal_purge"
    post_purge: str = "brutal_purge"

    def describe(self) -> str:
        return _describe_module(self.op, self.module, self.pre_purge, self.post_purge, ())


@dataclass(frozen=True)
class Purge(Instruction):
    modules: Tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "modules", _as_tuple(self.modules))

    def describe(self) -> str:
        return f"{self.op} [{', '.join(self.modules)}]"


@dataclass(frozen=True)
class DeleteModule(Instruction):
    module: str
    dep_mods: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "dep_mods", _as_tuple(self.dep_mods))

    def describe(self) -> str:
        return _describe_module(self.op, self.module, None, None, self.dep_mods)


# ---------------------------------------------------------------------------
# process mutating instructions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Update(Instruction):
    """Suspend the processes running ``module``, reload it and resume them.

    ``change`` is either ``"soft"``, ``("advanced", extra)`` or ``None`` when
    the native instruction omitted it.  ``mod_type`` is ``"supervisor"`` for
    supervisor updates.
    """

    module: str
    change: Any = None
    timeout: Any = None
    mod_type: Optional[str] = None
    pre_purge: Optional[str] = None
    post_purge: Optional[str] = None
    dep_mods: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "dep_mods", _as_tuple(self.dep_mods))
        if isinstance(self.change, list):
            object.__setattr__(self, "change", tuple(self.change))

    def describe(self) -> str:
        parts = [self.op, self.module]
        if self.mod_type is not None:
            parts.append(self.mod_type)
        if self.change is not None:
            parts.append(f"change={self.change!r}")
        if self.timeout is not None:
            parts.append(f"timeout={self.timeout!r}")
        if self.dep_mods:
            parts.append(f"deps=[{', '.join(self.dep_mods)}]")
        return " ".join(parts)


@dataclass(frozen=True)
class CodeChange(Instruction):
    """Send the ``code_change`` system event to processes of ``modules``.

    ``modules`` holds ``(module, extra)`` pairs.  ``mode`` is ``"up"`` or
    ``"down"`` when the native instruction carried one.
    """

    modules: Tuple[Tuple[str, Any], ...]
    mode: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "modules", tuple(tuple(entry) for entry in self.modules)
        )

    def describe(self) -> str:
        modules = ", ".join(module for module, _extra in self.modules)
        prefix = self.op if self.mode is None else f"{self.op} {self.mode}"
        return f"{prefix} [{modules}]"


@dataclass(frozen=True)
class Start(Instruction):
    modules: Tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "modules", _as_tuple(self.modules))

    def describe(self) -> str:
        return f"{self.op} [{', '.join(self.modules)}]"


@dataclass(frozen=True)
class Stop(Instruction):
    modules: Tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "modules", _as_tuple(self.modules))

    def describe(self) -> str:
        return f"{self.op} [{', '.join(self.modules)}]"


# ---------------------------------------------------------------------------
# application mutating instructions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AddApplication(Instruction):
    application: str
    type: Optional[str] = None

    def describe(self) -> str:
        if self.type is None:
            return f"{self.op} {self.application}"
        return f"{self.op} {self.application} {self.type}"


@dataclass(frozen=True)
class RemoveApplication(Instruction):
    application: str

    def describe(self) -> str:
        return f"{self.op} {self.application}"


@dataclass(frozen=True)
class RestartApplication(Instruction):
    application: str

    def describe(self) -> str:
        return f"{self.op} {self.application}"


@dataclass(frozen=True)
class RestartEmulator(Instruction):
    pass


@dataclass(frozen=True)
class RestartNewEmulator(Instruction):
    pass


# ---------------------------------------------------------------------------
# user logic
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Invoke(Instruction):
    """Call ``target.selector(*arguments)`` on the upgrading node."""

    target: str
    selector: str
    arguments: Tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "arguments", _as_tuple(self.arguments))

    @property
    def is_runnable(self) -> bool:
        return self.selector == RUN_SELECTOR

    def describe(self) -> str:
        return f"{self.op} {self.target}.{self.selector}({_render_args(self.arguments)})"


@dataclass(frozen=True)
class Opaque(Instruction):
    """Wrapper for native instructions this package does not model."""

    term: Any = field(default=None, metadata={"verbatim": True})

    def describe(self) -> str:
        return f"{self.op} {self.term!r}"


def _describe_module(
    op: str,
    module: str,
    pre_purge: Optional[str],
    post_purge: Optional[str],
    dep_mods: Tuple[str, ...],
) -> str:
    parts = [op, module]
    if pre_purge is not None or post_purge is not None:
        parts.append(f"{pre_purge or '-'}/{post_purge or '-'}")
    if dep_mods:
        parts.append(f"deps=[{', '.join(dep_mods)}]")
    return " ".join(parts)


def runnable(unit: str, arguments: Iterable[Any] = ()) -> Invoke:
    """Return the dispatch form ``Invoke(unit, "run", arguments)``."""

    return Invoke(unit, RUN_SELECTOR, _as_tuple(arguments))


POINT_OF_NO_RETURN = PointOfNoReturn()

_OP_NAMES = {
    PointOfNoReturn: "point_of_no_return",
    LoadObjectCode: "load_object_code",
    LoadModule: "load_module",
    AddModule: "add_module",
    Load: "load",
    Remove: "remove",
    Purge: "purge",
    DeleteModule: "delete_module",
    Update: "update",
    CodeChange: "code_change",
    Start: "start",
    Stop: "stop",
    AddApplication: "add_application",
    RemoveApplication: "remove_application",
    RestartApplication: "restart_application",
    RestartEmulator: "restart_emulator",
    RestartNewEmulator: "restart_new_emulator",
    Invoke: "apply",
    Opaque: "opaque",
}

INSTRUCTION_TYPES = dict((name, cls) for cls, name in _OP_NAMES.items())


__all__ = [
    "AddApplication",
    "AddModule",
    "CodeChange",
    "DeleteModule",
    "INSTRUCTION_TYPES",
    "Instruction",
    "Invoke",
    "Load",
    "LoadModule",
    "LoadObjectCode",
    "Opaque",
    "POINT_OF_NO_RETURN",
    "PointOfNoReturn",
    "Purge",
    "RUN_SELECTOR",
    "Remove",
    "RemoveApplication",
    "RestartApplication",
    "RestartEmulator",
    "RestartNewEmulator",
    "Start",
    "Stop",
    "Update",
    "runnable",
]
