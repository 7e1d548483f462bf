"""Unit tests for field name resolution."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from functools import singledispatchmethod
from typing import Any, ClassVar

import pytest

from dataapi_client.core.config import MappingOptions
from dataapi_client.core.enums import Population
from dataapi_client.core.exceptions import (
    AmbiguousSetterError,
    CannotAccessFieldError,
    CannotSetValueError,
    FieldNotFoundError,
    NoFieldOrSetterError,
    StaticFieldError,
    VoidReturnTypeError,
)
from dataapi_client.mapping.resolver import (
    FieldAccessor,
    SetterAccessor,
    find_all_args_constructor,
    find_setter,
    read_value,
    resolve_writer,
)

OPTIONS = MappingOptions()


class WithGetter:
    def __init__(self) -> None:
        self.name = "field"

    def get_name(self) -> str:
        return "getter"


class WithCamelGetter:
    def getName(self) -> str:  # noqa: N802
        return "camel"


class WithPrivateAttribute:
    def __init__(self) -> None:
        self._secret = "hidden"


class WithVoidGetter:
    def get_name(self) -> None:
        pass


class WithNone:
    def __init__(self) -> None:
        self.value = None


class WithSetter:
    name: str = ""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def set_name(self, value: str) -> None:
        self.calls.append(value)


class WithProperty:
    def __init__(self) -> None:
        self._price = Decimal(0)

    @property
    def price(self) -> Decimal:
        return self._price

    @price.setter
    def price(self, value: Decimal) -> None:
        self._price = value


class WithReadOnlyProperty:
    @property
    def total(self) -> int:
        return 1


class WithOverloadedSetter:
    @singledispatchmethod
    def set_value(self, value: object) -> None:
        self.value = value

    @set_value.register
    def _(self, value: int) -> None:
        self.value = value

    @set_value.register
    def _(self, value: str) -> None:
        self.value = value


class WithTwoSetterSpellings:
    def set_name(self, value: str) -> None:
        pass

    def setName(self, value: str) -> None:  # noqa: N802
        pass


class WithStaticSetter:
    name: str = ""

    @staticmethod
    def set_name(value: str) -> None:
        pass


class WithClassVar:
    counter: ClassVar[int] = 0


class WithFailingSetter:
    def set_name(self, value: str) -> None:
        raise RuntimeError("nope")


@dataclass(frozen=True)
class FrozenPoint:
    x: int = 0


class PlainDefaults:
    name = None
    count = 0


@dataclass
class Point:
    x: int
    y: int


class TestReadValue:
    def test_getter_beats_attribute(self) -> None:
        assert read_value(WithGetter(), "name") == "getter"

    def test_camel_case_getter(self) -> None:
        assert read_value(WithCamelGetter(), "name") == "camel"

    def test_underscore_attribute_fallback(self) -> None:
        assert read_value(WithPrivateAttribute(), "secret") == "hidden"

    def test_stored_none_is_returned(self) -> None:
        assert read_value(WithNone(), "value") is None

    def test_missing_field(self) -> None:
        with pytest.raises(FieldNotFoundError, match="'missing'"):
            read_value(WithNone(), "missing")

    def test_void_getter(self) -> None:
        with pytest.raises(VoidReturnTypeError, match="get_name"):
            read_value(WithVoidGetter(), "name")


class TestFindSetter:
    def test_setter_method(self) -> None:
        setter = find_setter(WithSetter, "name")
        assert setter == SetterAccessor("name", "set_name", str)

    def test_property_setter(self) -> None:
        setter = find_setter(WithProperty, "price")
        assert setter is not None
        assert setter.is_property
        assert setter.declared_type is Decimal

    def test_read_only_property_is_not_a_setter(self) -> None:
        assert find_setter(WithReadOnlyProperty, "total") is None

    def test_overloads_are_ambiguous(self) -> None:
        with pytest.raises(AmbiguousSetterError, match="Ambiguous setter"):
            find_setter(WithOverloadedSetter, "value")

    def test_two_spellings_are_ambiguous(self) -> None:
        with pytest.raises(AmbiguousSetterError):
            find_setter(WithTwoSetterSpellings, "name")

    def test_static_method_is_not_a_setter(self) -> None:
        assert find_setter(WithStaticSetter, "name") is None


class TestResolveWriter:
    def test_setter_preferred_over_field(self) -> None:
        accessor = resolve_writer(WithSetter(), "name", OPTIONS)
        assert isinstance(accessor, SetterAccessor)

    def test_field_population_skips_setter(self) -> None:
        accessor = resolve_writer(WithSetter(), "name", OPTIONS, Population.FIELDS)
        assert accessor == FieldAccessor("name", "name", str)

    def test_plain_class_defaults_are_fields(self) -> None:
        accessor = resolve_writer(PlainDefaults(), "count", OPTIONS)
        assert isinstance(accessor, FieldAccessor)

    def test_missing_raises(self) -> None:
        with pytest.raises(NoFieldOrSetterError, match="does not contain field 'nope'"):
            resolve_writer(PlainDefaults(), "nope", OPTIONS)

    def test_missing_ignored(self) -> None:
        options = MappingOptions(ignore_missing_setters=True)
        assert resolve_writer(PlainDefaults(), "nope", options) is None

    def test_ignore_missing_setters_does_not_apply_to_fields(self) -> None:
        options = MappingOptions(ignore_missing_setters=True)
        with pytest.raises(NoFieldOrSetterError):
            resolve_writer(PlainDefaults(), "nope", options, Population.FIELDS)

    def test_class_var_is_static_for_fields(self) -> None:
        with pytest.raises(StaticFieldError):
            resolve_writer(WithClassVar(), "counter", OPTIONS, Population.FIELDS)

    def test_class_var_is_not_found_for_properties(self) -> None:
        with pytest.raises(NoFieldOrSetterError):
            resolve_writer(WithClassVar(), "counter", OPTIONS)

    def test_frozen_dataclass_cannot_be_written(self) -> None:
        instance = FrozenPoint()
        accessor = resolve_writer(instance, "x", OPTIONS)
        assert accessor is not None
        with pytest.raises(CannotAccessFieldError):
            accessor.write(instance, 5)

    def test_read_only_property_cannot_be_written(self) -> None:
        instance = WithReadOnlyProperty()
        accessor = resolve_writer(instance, "total", OPTIONS)
        assert accessor is not None
        with pytest.raises(CannotAccessFieldError):
            accessor.write(instance, 5)

    def test_failing_setter(self) -> None:
        instance = WithFailingSetter()
        accessor = resolve_writer(instance, "name", OPTIONS)
        assert accessor is not None
        with pytest.raises(CannotSetValueError) as exc_info:
            accessor.write(instance, "x")
        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestFindAllArgsConstructor:
    def test_matches_name_set(self) -> None:
        plan = find_all_args_constructor(Point, ["y", "x"])
        assert plan is not None
        assert plan.declared_types == {"x": int, "y": int}

    def test_subset_does_not_match(self) -> None:
        assert find_all_args_constructor(Point, ["x"]) is None

    def test_superset_does_not_match(self) -> None:
        assert find_all_args_constructor(Point, ["x", "y", "z"]) is None

    def test_empty_columns_never_match(self) -> None:
        assert find_all_args_constructor(PlainDefaults, []) is None

    def test_local_type_only_loses_its_own_annotation(self) -> None:
        class Tag:
            pass

        @dataclass
        class Line:
            amount: Decimal
            tag: Tag | None = None

        plan = find_all_args_constructor(Line, ["amount", "tag"])
        assert plan is not None
        assert plan.declared_types == {"amount": Decimal, "tag": Any}
