"""Ready-made validator predicates.

Read validators are called as ``fn(key, *fixed_args)`` and write validators as
``fn(key, value, *fixed_args)``; policy parameters (allowed keys, prefixes,
roles) are meant to be installed as fixed args.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence, Tuple, Type, Union

from optionstore.validators.registry import register_validator


TypeSpec = Union[str, Type[Any], Sequence[Union[str, Type[Any]]]]

_TYPE_NAMES: dict[str, Type[Any]] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "list": list,
    "dict": dict,
}

ANY_KEY = "*"


@register_validator(kind="read", name="allow_all")
def allow_all(key: Any, *_: Any) -> bool:
    return True


@register_validator(kind="write", name="allow_all")
def allow_all_writes(key: Any, value: Any, *_: Any) -> bool:
    return True


@register_validator(kind="read", name="allowed_keys")
def allowed_keys(key: Any, *allowed: Any) -> bool:
    return key in allowed


@register_validator(kind="write", name="allowed_keys")
def allowed_write_keys(key: Any, value: Any, *allowed: Any) -> bool:
    return key in allowed


@register_validator(kind="read", name="hide_prefix")
def hide_prefix(key: Any, prefix: str = "_") -> bool:
    return not str(key).startswith(prefix)


@register_validator(kind="write", name="reject_prefix")
def reject_prefix(key: Any, value: Any, prefix: str = "_") -> bool:
    return not str(key).startswith(prefix)


def _resolve_one(spec: Union[str, Type[Any]]) -> Type[Any]:
    if isinstance(spec, str):
        try:
            return _TYPE_NAMES[spec]
        except KeyError as exc:
            raise ValueError(f"Unknown type name {spec!r}; expected one of {sorted(_TYPE_NAMES)}") from exc
    if not isinstance(spec, type):
        raise ValueError(f"Expected a type or type name, got {spec!r}")
    return spec


def _resolve_type(spec: TypeSpec) -> Tuple[Type[Any], ...]:
    # Lists come from JSON configs, tuples from Python callers
    if isinstance(spec, (list, tuple)):
        return tuple(_resolve_one(s) for s in spec)
    return (_resolve_one(spec),)


@register_validator(kind="write", name="value_types")
def value_types(key: Any, value: Any, schema: Mapping[Any, TypeSpec]) -> bool:
    """Accept ``value`` only if it is an instance of the type declared for ``key``.

    Keys missing from ``schema`` are accepted. ``True``/``False`` do not count
    as ints unless ``bool`` is declared.
    """
    if key not in schema:
        return True
    expected = _resolve_type(schema[key])
    if isinstance(value, bool) and bool not in expected:
        return False
    return isinstance(value, expected)


def _roles_for(key: Any, policy: Mapping[Any, Iterable[str]]) -> Iterable[str]:
    if key in policy:
        return policy[key]
    return policy.get(ANY_KEY, ())


@register_validator(kind="read", name="role_can_read")
def role_can_read(key: Any, role: str, policy: Mapping[Any, Iterable[str]]) -> bool:
    return role in _roles_for(key, policy)


@register_validator(kind="write", name="role_can_write")
def role_can_write(key: Any, value: Any, role: str, policy: Mapping[Any, Iterable[str]]) -> bool:
    return role in _roles_for(key, policy)
