from __future__ import annotations

from typing import Any, Callable, ClassVar, Dict, List, Literal, Optional, Tuple


ValidatorKind = Literal["read", "write"]
ValidatorKey = Tuple[str, str]
ValidatorFn = Callable[..., Any]

_KINDS = ("read", "write")


class ValidatorRegistryError(RuntimeError):
    pass


class ValidatorRegistry:
    _registry: ClassVar[Dict[ValidatorKey, ValidatorFn]] = {}

    @classmethod
    def register(
        cls,
        *,
        kind: ValidatorKind,
        name: str,
        validator: ValidatorFn,
        overwrite: bool = False,
    ) -> None:
        if kind not in _KINDS:
            raise ValidatorRegistryError(f"Unknown validator kind {kind!r}; expected one of {_KINDS}")
        key = (kind, name)
        if not overwrite and key in cls._registry:
            existing = cls._registry[key]
            raise ValidatorRegistryError(
                f"Validator already registered for kind={kind!r}, name={name!r}: {existing}"
            )
        cls._registry[key] = validator

    @classmethod
    def get(cls, kind: ValidatorKind, name: str) -> ValidatorFn:
        key = (kind, name)
        try:
            return cls._registry[key]
        except KeyError as exc:
            raise ValidatorRegistryError(
                f"No validator registered for kind={kind!r}, name={name!r}"
            ) from exc

    @classmethod
    def try_get(cls, kind: ValidatorKind, name: str) -> Optional[ValidatorFn]:
        return cls._registry.get((kind, name))

    @classmethod
    def names(cls, kind: ValidatorKind) -> List[str]:
        return sorted(name for k, name in cls._registry if k == kind)

    @classmethod
    def clear(cls) -> None:
        cls._registry.clear()


def register_validator(
    *,
    kind: ValidatorKind,
    name: str,
    overwrite: bool = False,
) -> Callable[[ValidatorFn], ValidatorFn]:
    def decorator(validator: ValidatorFn) -> ValidatorFn:
        ValidatorRegistry.register(
            kind=kind,
            name=name,
            validator=validator,
            overwrite=overwrite,
        )
        return validator

    return decorator
