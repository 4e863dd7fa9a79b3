"""Tests for TranslationState."""

import pytest

from vba2js.core.errors import WithStackUnderflowError
from vba2js.parser.state import TranslationState


class TestArrayNames:
    """Test array registration and scoping."""

    def test_global_registration_outside_routine(self, fresh_state):
        fresh_state.register_array("data")
        assert "data" in fresh_state.global_arrays
        assert fresh_state.is_array("data")

    def test_local_registration_inside_routine(self, fresh_state):
        fresh_state.enter_routine()
        fresh_state.register_array("tmp")
        assert "tmp" in fresh_state.local_arrays
        assert "tmp" not in fresh_state.global_arrays

    def test_leaving_outermost_routine_clears_locals(self, fresh_state):
        fresh_state.enter_routine()
        fresh_state.register_array("tmp")
        fresh_state.leave_routine()
        assert not fresh_state.is_array("tmp")

    def test_nested_routine_keeps_locals(self, fresh_state):
        fresh_state.enter_routine()
        fresh_state.enter_routine()
        fresh_state.register_array("tmp")
        fresh_state.leave_routine()
        assert fresh_state.is_array("tmp")

    def test_globals_survive_routines(self, fresh_state):
        fresh_state.add_global_array("data")
        fresh_state.enter_routine()
        fresh_state.leave_routine()
        assert fresh_state.is_array("data")


class TestWithStack:
    """Test the With-target stack."""

    def test_push_and_pop(self, fresh_state):
        fresh_state.push_with("ws")
        fresh_state.push_with("ws.Range(\"A1\")")
        assert fresh_state.with_depth == 2
        assert fresh_state.current_with() == "ws.Range(\"A1\")"
        assert fresh_state.pop_with() == "ws.Range(\"A1\")"
        assert fresh_state.current_with() == "ws"

    def test_pop_empty(self, fresh_state):
        with pytest.raises(WithStackUnderflowError):
            fresh_state.pop_with()

    def test_current_empty(self, fresh_state):
        with pytest.raises(WithStackUnderflowError):
            fresh_state.current_with()


class TestMisc:

    def test_type_names_are_never_cleared(self, fresh_state):
        fresh_state.add_type_name("Point")
        fresh_state.enter_routine()
        fresh_state.leave_routine()
        assert fresh_state.is_type_name("Point")

    def test_return_variable(self, fresh_state):
        fresh_state.function_name = "Total"
        assert fresh_state.return_variable == "_Total"

    def test_indent(self, fresh_state):
        fresh_state.indent()
        fresh_state.indent()
        fresh_state.undent()
        assert fresh_state.depth == 1

    def test_instances_are_independent(self):
        first = TranslationState()
        first.register_array("a")
        assert not TranslationState().is_array("a")
