"""Field name resolution.

Locates, by name, how to read a value out of a parameter object and how to
write a value into a result object. Precedence is fixed so mapping is
deterministic:

    read:   getter method  ->  attribute  ->  _attribute
    write:  setter         ->  field      (property population)
            field                         (field population)
    create: __init__ whose parameter names equal the column names

A getter is ``get_<name>()`` / ``get<Name>()`` (``_get_<name>()`` as the
non-public fallback). A setter is a property with a setter, a public
``set_<name>(value)`` / ``set<Name>(value)`` method, or each implementation
registered on a ``singledispatchmethod`` of that name. More than one setter
for a field is an error, never a silent pick.

A field is anything declared on the class or its bases (annotations,
dataclass/pydantic fields, ``__slots__``, plain class-level defaults) or
present in the instance ``__dict__``. Fields annotated ``ClassVar`` are
static and never written.
"""

from __future__ import annotations

import inspect
import sys
from collections.abc import Callable
from dataclasses import dataclass
from functools import singledispatchmethod
from typing import Any, ClassVar, get_origin, get_type_hints

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

_MISSING = object()

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


# ---------------------------------------------------------------------------
# Annotation helpers
# ---------------------------------------------------------------------------


def _evaluate(annotation: Any, globalns: dict[str, Any], localns: dict[str, Any]) -> Any:
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, globalns, localns)  # noqa: S307
    except Exception:
        # left as a string, which converts as Any
        return annotation


def _type_hints(obj: Any) -> dict[str, Any]:
    """Resolved annotations of *obj* (a class or a function).

    When the whole set does not resolve, each annotation is evaluated on
    its own, so one unresolvable name only affects its own entry.
    """
    try:
        return get_type_hints(obj)
    except Exception:
        pass

    hints: dict[str, Any] = {}
    if isinstance(obj, type):
        for klass in reversed(obj.__mro__):
            module = sys.modules.get(klass.__module__)
            globalns = dict(vars(module)) if module is not None else {}
            localns = dict(vars(klass))
            for name, annotation in inspect.get_annotations(klass).items():
                hints[name] = _evaluate(annotation, globalns, localns)
        return hints

    globalns = getattr(obj, "__globals__", {})
    for name, annotation in (getattr(obj, "__annotations__", None) or {}).items():
        hints[name] = _evaluate(annotation, globalns, {})
    return hints


def _is_class_var(annotation: Any) -> bool:
    if annotation is ClassVar or get_origin(annotation) is ClassVar:
        return True
    if isinstance(annotation, str):
        return annotation.split("[", 1)[0].strip() in ("ClassVar", "typing.ClassVar")
    return False


def conversion_type(annotation: Any) -> Any:
    """Map an annotation to a converter target; unknown means Any."""
    if annotation is inspect.Parameter.empty or isinstance(annotation, str):
        return Any
    return annotation


def _capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]


# ---------------------------------------------------------------------------
# Read side
# ---------------------------------------------------------------------------


def _returns_none(func: Callable[..., Any]) -> bool:
    try:
        annotation = inspect.signature(func).return_annotation
    except (ValueError, TypeError):
        return False
    return annotation is None or annotation is type(None) or annotation == "None"


def _takes_no_arguments(func: Callable[..., Any]) -> bool:
    try:
        parameters = inspect.signature(func).parameters.values()
    except (ValueError, TypeError):
        return False
    return all(p.default is not p.empty or p.kind in _VARIADIC for p in parameters)


def find_getter(obj: Any, field_name: str) -> Callable[[], Any] | None:
    """Return the bound getter for *field_name*, or None.

    Raises:
        VoidReturnTypeError: If the getter is annotated to return None.
    """
    for method_name in (
        f"get_{field_name}",
        f"get{_capitalize(field_name)}",
        f"_get_{field_name}",
    ):
        method = getattr(obj, method_name, None)
        if not callable(method) or not _takes_no_arguments(method):
            continue
        if _returns_none(method):
            raise VoidReturnTypeError(method_name)
        return method
    return None


def _find_attribute(obj: Any, field_name: str) -> Any:
    for attribute in (field_name, f"_{field_name}"):
        value = getattr(obj, attribute, _MISSING)
        if value is _MISSING or inspect.ismethod(value):
            continue
        return value
    return _MISSING


def read_value(obj: Any, field_name: str) -> Any:
    """Read *field_name* from *obj* via getter, then attribute.

    A stored None is returned as None; only an absent member raises.

    Raises:
        FieldNotFoundError: If neither a getter nor an attribute exists.
        VoidReturnTypeError: If the matching getter returns None by declaration.
    """
    getter = find_getter(obj, field_name)
    if getter is not None:
        return getter()

    value = _find_attribute(obj, field_name)
    if value is _MISSING:
        raise FieldNotFoundError(field_name, obj)
    return value


# ---------------------------------------------------------------------------
# Write side
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SetterAccessor:
    """Writes through a property setter or a setter method."""

    field_name: str
    attribute: str
    declared_type: Any
    is_property: bool = False

    def write(self, instance: Any, value: Any) -> None:
        try:
            if self.is_property:
                setattr(instance, self.attribute, value)
            else:
                getattr(instance, self.attribute)(value)
        except Exception as e:
            raise CannotSetValueError(self.field_name) from e


@dataclass(frozen=True)
class FieldAccessor:
    """Writes straight to an attribute."""

    field_name: str
    attribute: str
    declared_type: Any

    def write(self, instance: Any, value: Any) -> None:
        try:
            setattr(instance, self.attribute, value)
        except (AttributeError, TypeError, ValueError) as e:
            # frozen dataclasses, frozen pydantic models, read-only properties
            raise CannotAccessFieldError(type(instance), self.field_name) from e


WriteAccessor = SetterAccessor | FieldAccessor


def _first_argument_type(func: Callable[..., Any]) -> Any:
    parameters = list(inspect.signature(func).parameters.values())[1:]
    if not parameters:
        return Any
    return conversion_type(_type_hints(func).get(parameters[0].name, parameters[0].annotation))


def _property_type(prop: property) -> Any:
    if prop.fset is not None:
        declared = _first_argument_type(prop.fset)
        if declared is not Any:
            return declared
    if prop.fget is not None:
        return conversion_type(_type_hints(prop.fget).get("return", inspect.Parameter.empty))
    return Any


def _is_setter_function(member: Any) -> bool:
    # staticmethod/classmethod objects are not plain functions
    if not inspect.isfunction(member):
        return False
    parameters = list(inspect.signature(member).parameters.values())
    return len(parameters) == 2 and all(p.kind in _POSITIONAL for p in parameters)


def _dispatch_candidates(
    field_name: str, method_name: str, member: singledispatchmethod
) -> list[SetterAccessor]:
    registry = member.dispatcher.registry
    return [
        SetterAccessor(field_name, method_name, Any if tp is object else tp)
        for tp in registry
    ]


def find_setter(cls: type, field_name: str) -> SetterAccessor | None:
    """Return the single setter for *field_name* on *cls*, or None.

    Raises:
        AmbiguousSetterError: If more than one setter qualifies.
    """
    candidates: list[SetterAccessor] = []

    prop = inspect.getattr_static(cls, field_name, None)
    if isinstance(prop, property) and prop.fset is not None:
        candidates.append(
            SetterAccessor(field_name, field_name, _property_type(prop), is_property=True)
        )

    for method_name in dict.fromkeys((f"set_{field_name}", f"set{_capitalize(field_name)}")):
        member = inspect.getattr_static(cls, method_name, None)
        if isinstance(member, singledispatchmethod):
            candidates.extend(_dispatch_candidates(field_name, method_name, member))
        elif _is_setter_function(member):
            candidates.append(
                SetterAccessor(field_name, method_name, _first_argument_type(member))
            )

    if len(candidates) > 1:
        described = [
            f"{c.attribute}({getattr(c.declared_type, '__name__', c.declared_type)})"
            for c in candidates
        ]
        raise AmbiguousSetterError(field_name, described)
    return candidates[0] if candidates else None


def _declared_fields(cls: type) -> dict[str, Any]:
    fields = _type_hints(cls)
    for klass in cls.__mro__:
        slots = getattr(klass, "__slots__", ())
        for slot in (slots,) if isinstance(slots, str) else slots:
            fields.setdefault(slot, Any)
    return fields


def find_field(instance: Any, field_name: str, *, static_is_error: bool) -> FieldAccessor | None:
    """Return a field accessor for *field_name* on *instance*, or None.

    Static (ClassVar) fields are skipped. When *static_is_error* is set and a
    static field was the only match, StaticFieldError is raised instead.
    """
    cls = type(instance)
    declared = _declared_fields(cls)
    instance_attrs = getattr(instance, "__dict__", {})
    static_match = False

    for attribute in (field_name, f"_{field_name}"):
        if attribute in declared:
            if _is_class_var(declared[attribute]):
                static_match = True
                continue
            return FieldAccessor(field_name, attribute, conversion_type(declared[attribute]))
        if attribute in instance_attrs:
            return FieldAccessor(field_name, attribute, Any)

        member = inspect.getattr_static(cls, attribute, _MISSING)
        if isinstance(member, property):
            return FieldAccessor(field_name, attribute, _property_type(member))
        if member is not _MISSING and not callable(member):
            if not isinstance(member, (staticmethod, classmethod)):
                return FieldAccessor(field_name, attribute, Any)

    if static_match and static_is_error:
        raise StaticFieldError(cls, field_name)
    return None


def resolve_writer(
    instance: Any,
    field_name: str,
    options: MappingOptions,
    population: Population = Population.PROPERTIES,
) -> WriteAccessor | None:
    """Resolve how *field_name* is written on *instance*.

    Returns None only when property population skips a missing accessor
    because ``options.ignore_missing_setters`` is set.

    Raises:
        NoFieldOrSetterError: If nothing matches.
        StaticFieldError: Field population, only a ClassVar matches.
        AmbiguousSetterError: Property population, several setters match.
    """
    cls = type(instance)
    if population is Population.FIELDS:
        field = find_field(instance, field_name, static_is_error=True)
        if field is None:
            raise NoFieldOrSetterError(cls, field_name)
        return field

    accessor: WriteAccessor | None = find_setter(cls, field_name)
    if accessor is None:
        accessor = find_field(instance, field_name, static_is_error=False)
    if accessor is None and not options.ignore_missing_setters:
        raise NoFieldOrSetterError(cls, field_name)
    return accessor


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ConstructorPlan:
    """An ``__init__`` whose parameters line up with the result columns."""

    target_class: type
    parameters: tuple[inspect.Parameter, ...]
    declared_types: dict[str, Any]


def _constructor_parameters(cls: type) -> list[inspect.Parameter] | None:
    try:
        signature = inspect.signature(cls)
    except (ValueError, TypeError):
        return None
    return [p for p in signature.parameters.values() if p.kind not in _VARIADIC]


def _constructor_types(cls: type) -> dict[str, Any]:
    types_ = _type_hints(cls)
    init = getattr(cls, "__init__", None)
    if inspect.isfunction(init):
        for name, hint in _type_hints(init).items():
            types_.setdefault(name, hint)
    return types_


def find_all_args_constructor(cls: type, field_names: list[str]) -> ConstructorPlan | None:
    """Return a plan for ``cls(...)`` when its parameter names equal *field_names*.

    The comparison is an unordered set comparison; an empty column list
    never matches.
    """
    if not field_names:
        return None
    parameters = _constructor_parameters(cls)
    if parameters is None or {p.name for p in parameters} != set(field_names):
        return None

    hints = _constructor_types(cls)
    declared = {
        p.name: conversion_type(hints.get(p.name, p.annotation)) for p in parameters
    }
    return ConstructorPlan(cls, tuple(parameters), declared)


def accepts_no_arguments(cls: type) -> bool:
    """True when ``cls()`` can be called without arguments."""
    parameters = _constructor_parameters(cls)
    if parameters is None:
        return getattr(cls, "__init__", None) is object.__init__
    return all(p.default is not p.empty for p in parameters)
