"""Unit tests for mask conditions, their factory and scoped inputs."""
import contextvars
from typing import Any

import pytest

from mp_masking.application.masking.conditions import (
    AlwaysMaskCondition,
    ConditionInputs,
    ConditionResolver,
    MaskCondition,
    MaskConditionFactory,
    MaskOnInput,
    MaskPhone,
)
from mp_masking.kernel.errors import ConditionCreationError, MaskConfigurationError


class NeedsArgs(MaskCondition):
    def __init__(self, role: str) -> None:
        self.role = role

    def should_mask(self, field_value: Any, containing: Any) -> bool:
        return True


class Container:
    def __init__(self, instances: dict[type, Any]) -> None:
        self._instances = instances

    def get_instance(self, type_: type) -> Any:
        return self._instances.get(type_)


class TestBuiltinConditions:
    def test_always(self) -> None:
        assert AlwaysMaskCondition().should_mask("x", None) is True

    def test_default_set_input_is_a_noop(self) -> None:
        condition = AlwaysMaskCondition()
        condition.set_input("anything")
        assert condition.should_mask(None, None) is True

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("MaskMe", True), ("maskme", True), ("MASKME", True), ("no", False), ("", False)],
    )
    def test_mask_on_input(self, value: str, expected: bool) -> None:
        condition = MaskOnInput()
        condition.set_input(value)
        assert condition.should_mask("x", None) is expected

    def test_mask_on_input_without_input(self) -> None:
        assert MaskOnInput().should_mask("x", None) is False

    def test_mask_on_input_ignores_non_string_input(self) -> None:
        condition = MaskOnInput("MaskMe")
        condition.set_input(42)
        assert condition.should_mask("x", None) is True

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("YES", True), ("yes", True), ("true", True), ("TRUE", True), ("no", False)],
    )
    def test_mask_phone(self, value: str, expected: bool) -> None:
        condition = MaskPhone()
        condition.set_input(value)
        assert condition.should_mask("555", None) is expected

    def test_mask_phone_without_flag(self) -> None:
        assert MaskPhone().should_mask("555", None) is False


class TestConditionInputs:
    def test_set_get_has(self, clean_condition_inputs) -> None:
        assert not ConditionInputs.has(MaskPhone)
        ConditionInputs.set(MaskPhone, "yes")
        assert ConditionInputs.has(MaskPhone)
        assert ConditionInputs.get(MaskPhone) == "yes"
        assert ConditionInputs.get(MaskOnInput, "default") == "default"

    def test_none_is_a_registered_input(self, clean_condition_inputs) -> None:
        ConditionInputs.set(MaskPhone, None)
        assert ConditionInputs.has(MaskPhone)

    def test_clear(self, clean_condition_inputs) -> None:
        ConditionInputs.set(MaskPhone, "yes")
        ConditionInputs.clear()
        assert not ConditionInputs.has(MaskPhone)
        assert ConditionInputs.snapshot() == {}

    def test_snapshot_is_not_affected_by_later_writes(self, clean_condition_inputs) -> None:
        ConditionInputs.set(MaskPhone, "yes")
        snapshot = ConditionInputs.snapshot()
        ConditionInputs.set(MaskOnInput, "MaskMe")
        assert dict(snapshot) == {MaskPhone: "yes"}

    def test_snapshot_is_read_only(self, clean_condition_inputs) -> None:
        with pytest.raises(TypeError):
            ConditionInputs.snapshot()[MaskPhone] = "yes"  # type: ignore[index]

    def test_child_context_writes_do_not_leak_to_parent(self, clean_condition_inputs) -> None:
        ConditionInputs.set(MaskPhone, "parent")

        def child() -> None:
            ConditionInputs.set(MaskPhone, "child")
            ConditionInputs.set(MaskOnInput, "MaskMe")

        contextvars.copy_context().run(child)
        assert ConditionInputs.get(MaskPhone) == "parent"
        assert not ConditionInputs.has(MaskOnInput)


class TestMaskConditionFactory:
    def test_default_construction(self) -> None:
        factory = MaskConditionFactory()
        assert not factory.has_resolver
        assert isinstance(factory.create_condition(AlwaysMaskCondition), AlwaysMaskCondition)

    def test_new_instance_per_call(self) -> None:
        factory = MaskConditionFactory()
        assert factory.create_condition(MaskPhone) is not factory.create_condition(MaskPhone)

    def test_resolver_protocol(self) -> None:
        shared = MaskPhone("yes")
        container = Container({MaskPhone: shared})
        assert isinstance(container, ConditionResolver)
        factory = MaskConditionFactory(container)
        assert factory.has_resolver
        assert factory.create_condition(MaskPhone) is shared

    def test_resolver_callable(self) -> None:
        factory = MaskConditionFactory(lambda cls: NeedsArgs("admin") if cls is NeedsArgs else None)
        assert factory.create_condition(NeedsArgs).role == "admin"

    def test_resolver_miss_falls_back_to_construction(self) -> None:
        factory = MaskConditionFactory(Container({}))
        assert isinstance(factory.create_condition(MaskOnInput), MaskOnInput)

    def test_resolver_failure_falls_back_to_construction(self) -> None:
        def broken(cls: type) -> Any:
            raise LookupError("container offline")

        factory = MaskConditionFactory(broken)
        assert isinstance(factory.create_condition(MaskOnInput), MaskOnInput)

    def test_unconstructible_condition(self) -> None:
        with pytest.raises(ConditionCreationError) as exc_info:
            MaskConditionFactory().create_condition(NeedsArgs)
        error = exc_info.value
        assert error.condition_cls is NeedsArgs
        assert isinstance(error.cause, TypeError)
        assert error.code == "condition_creation_failed"
        assert isinstance(error, MaskConfigurationError)

    def test_set_resolver_none_removes_it(self) -> None:
        factory = MaskConditionFactory(Container({}))
        factory.set_resolver(None)
        assert not factory.has_resolver
