"""
Mutable per-conversion state shared by the expression parser and translator.

One TranslationState belongs to exactly one conversion run. It is passed
explicitly to everything that needs it; nothing here is process-global.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from vba2js.core.errors import WithStackUnderflowError


@dataclass
class TranslationState:
    """
    Context of a single conversion.

    Attributes:
        with_targets: Stack of active With-block target expressions
        global_arrays: Array names declared outside any Sub/Function
        local_arrays: Array names declared inside the current Sub/Function
        type_names: User-defined Type names (never cleared)
        routine_depth: Sub/Function nesting counter
        depth: Current output indent depth
        function_name: Name of the enclosing Function, "" outside one
    """

    with_targets: list[str] = field(default_factory=list)
    global_arrays: set[str] = field(default_factory=set)
    local_arrays: set[str] = field(default_factory=set)
    type_names: set[str] = field(default_factory=set)
    routine_depth: int = 0
    depth: int = 0
    function_name: str = ""

    # Array names

    def add_global_array(self, name: str) -> None:
        self.global_arrays.add(name)

    def add_local_array(self, name: str) -> None:
        self.local_arrays.add(name)

    def register_array(self, name: str) -> None:
        """Record an array declaration in the scope it belongs to."""
        if self.routine_depth > 0:
            self.add_local_array(name)
        else:
            self.add_global_array(name)

    def is_array(self, name: str) -> bool:
        return name in self.local_arrays or name in self.global_arrays

    def clear_local_arrays(self) -> None:
        self.local_arrays.clear()

    # With blocks

    def push_with(self, target: str) -> None:
        self.with_targets.append(target)

    def current_with(self) -> str:
        """Return the innermost With target."""
        if not self.with_targets:
            raise WithStackUnderflowError("Member access with no enclosing With block")
        return self.with_targets[-1]

    def pop_with(self) -> str:
        if not self.with_targets:
            raise WithStackUnderflowError("End With without matching With")
        return self.with_targets.pop()

    @property
    def with_depth(self) -> int:
        return len(self.with_targets)

    # User-defined types

    def add_type_name(self, name: str) -> None:
        self.type_names.add(name)

    def is_type_name(self, name: str) -> bool:
        return name in self.type_names

    # Routines

    def enter_routine(self) -> None:
        self.routine_depth += 1

    def leave_routine(self) -> None:
        """Leave a Sub/Function; locals do not outlive the outermost routine."""
        self.routine_depth -= 1
        if self.routine_depth == 0:
            self.clear_local_arrays()

    @property
    def return_variable(self) -> str:
        """Variable that stands in for the enclosing Function's return value."""
        return "_" + self.function_name

    # Indentation

    def indent(self) -> None:
        self.depth += 1

    def undent(self) -> None:
        self.depth -= 1
