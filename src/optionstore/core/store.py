from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from optionstore.core.exceptions import RejectedWriteError, RejectionPolicy
from optionstore.core.logger import get_logger, scoped

logger = get_logger(__name__)


ReadValidatorFn = Callable[..., Any]   # (key, *fixed_args) -> bool
WriteValidatorFn = Callable[..., Any]  # (key, value, *fixed_args) -> bool


def _approve_read(key: Any) -> bool:
    return True


def _approve_write(key: Any, value: Any) -> bool:
    return True


@dataclass(frozen=True)
class ValidatorBinding:
    """A validator function together with the fixed arguments appended to every call."""

    fn: Callable[..., Any]
    args: Tuple[Any, ...] = ()

    def __call__(self, *leading: Any) -> bool:
        # Only an exact True approves; truthy non-bool results are rejections.
        return self.fn(*leading, *self.args) is True


class KeyState(Enum):
    ABSENT = "absent"      # Never stored (or cleared by reset)
    HIDDEN = "hidden"      # Stored, but the read validator refuses it
    VISIBLE = "visible"


@dataclass
class SetResult:
    """Per-key outcome of a write. Keys appear in call order."""

    accepted: List[Any] = field(default_factory=list)
    rejected: List[Any] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.rejected

    def raise_for_rejected(self, identifier: Optional[str] = None) -> None:
        if self.rejected:
            raise RejectedWriteError(rejected=self.rejected, identifier=identifier)


def _is_key(obj: Any) -> bool:
    return isinstance(obj, (str, int)) and not isinstance(obj, bool)


def _is_key_collection(obj: Any) -> bool:
    return isinstance(obj, Iterable) and not isinstance(obj, (str, bytes, bytearray))


class OptionStore:
    """
    Key-value option container gated by a read and a write validator.

    Every read goes through :meth:`has`, which asks the read validator about the
    key on every call; every write asks the write validator first and silently
    drops the pair when it does not answer ``True``.

    Example:
        >>> store = OptionStore("db")
        >>> store.set_write_validator(lambda key, value: not key.startswith("_"))
        >>> store.set({"host": "localhost", "_secret": "x"})
        >>> store.get()
        {'host': 'localhost'}
    """

    def __init__(self, identifier: Optional[str] = None):
        self._values: Dict[Any, Any] = {}
        self._identifier = identifier
        self._overlay_enabled = False
        self._read_validator = ValidatorBinding(_approve_read)
        self._write_validator = ValidatorBinding(_approve_write)

    # --- administrative accessors ---

    @property
    def identifier(self) -> Optional[str]:
        return self._identifier

    @identifier.setter
    def identifier(self, value: Optional[str]) -> None:
        self._identifier = value

    @property
    def overlay_enabled(self) -> bool:
        return self._overlay_enabled

    @overlay_enabled.setter
    def overlay_enabled(self, value: Any) -> None:
        self._overlay_enabled = bool(value)

    @property
    def read_validator(self) -> ValidatorBinding:
        return self._read_validator

    @property
    def write_validator(self) -> ValidatorBinding:
        return self._write_validator

    def set_read_validator(self, fn: ReadValidatorFn, fixed_args: Sequence[Any] = ()) -> None:
        self._read_validator = ValidatorBinding(fn, tuple(fixed_args))
        self._log(logging.DEBUG, "Read validator replaced: %r args=%r", fn, self._read_validator.args)

    def set_write_validator(self, fn: WriteValidatorFn, fixed_args: Sequence[Any] = ()) -> None:
        self._write_validator = ValidatorBinding(fn, tuple(fixed_args))
        self._log(logging.DEBUG, "Write validator replaced: %r args=%r", fn, self._write_validator.args)

    # --- writes ---

    def set(self, keys: Any, value: Any = None) -> None:
        """Store ``value`` under a single key, or every pair of a mapping.

        Pairs refused by the write validator are skipped without notice.
        """
        self._write(keys, value)

    def set_with_result(
        self,
        keys: Any,
        value: Any = None,
        *,
        on_reject: RejectionPolicy = RejectionPolicy.IGNORE,
    ) -> SetResult:
        """Same writes as :meth:`set`, reporting which keys took effect.

        Raises:
            RejectedWriteError: if ``on_reject`` is FAIL and any key was refused
        """
        result = self._write(keys, value)
        if result.rejected:
            if on_reject == RejectionPolicy.FAIL:
                result.raise_for_rejected(self._identifier)
            elif on_reject == RejectionPolicy.WARN:
                self._log(logging.WARNING, "Write rejected on %s for keys %r", self, result.rejected)
        return result

    def _write(self, keys: Any, value: Any) -> SetResult:
        if _is_key(keys):
            pairs: Iterable[Tuple[Any, Any]] = ((keys, value),)
        elif isinstance(keys, Mapping):
            pairs = list(keys.items())
        else:
            return SetResult()

        result = SetResult()
        for key, val in pairs:
            # Keys that get() could not address as single keys are never stored
            if _is_key(key) and self._write_validator(key, val):
                self._values[key] = val
                result.accepted.append(key)
            else:
                self._log(logging.DEBUG, "Write dropped for key=%r", key)
                result.rejected.append(key)
        return result

    def reset(self) -> None:
        self._values.clear()
        self._log(logging.DEBUG, "Values cleared")

    # --- reads ---

    def has(self, key: Any) -> bool:
        try:
            stored = key in self._values
        except TypeError:
            # Unhashable keys can never have been stored
            return False
        return stored and self._read_validator(key)

    def __contains__(self, key: Any) -> bool:
        return self.has(key)

    def inspect(self, key: Any) -> KeyState:
        if self.has(key):
            return KeyState.VISIBLE
        try:
            stored = key in self._values
        except TypeError:
            stored = False
        return KeyState.HIDDEN if stored else KeyState.ABSENT

    def get(self, *keys: Any) -> Any:
        """Read options, shaped by the call.

        - ``get()``: every visible option, in insertion order
        - ``get("a")``: the bare value of ``a``, or None
        - ``get(["a", "b"])``: mapping of the visible keys among those asked for
        - ``get("a", ["b", "c"])``: arguments flattened, then as above
        """
        if not keys:
            return self.get_all()
        if len(keys) == 1:
            only = keys[0]
            if _is_key(only):
                return self.get_one(only)
            if _is_key_collection(only):
                return self.get_many(only)
            return None

        flat: List[Any] = []
        for arg in keys:
            if _is_key(arg):
                flat.append(arg)
            elif _is_key_collection(arg):
                flat.extend(arg)
        return self.get_many(flat)

    def get_one(self, key: Any) -> Any:
        if self.has(key):
            return self._values[key]
        return None

    def get_many(self, keys: Iterable[Any]) -> Dict[Any, Any]:
        return {k: self._values[k] for k in keys if self.has(k)}

    def get_all(self) -> Dict[Any, Any]:
        # Snapshot the keys so a validator touching the store cannot break iteration
        return {k: v for k, v in list(self._values.items()) if self.has(k)}

    def filter(self, keys: Any, transform: Callable[..., Any], args: Sequence[Any] = ()) -> Any:
        """Read like :meth:`get` and pass each value through ``transform(value, *args)``.

        A single string key yields the transformed value (or None), a collection
        yields a mapping; the stored values are left untouched.
        """
        if isinstance(keys, str):
            values = self._filter([keys], transform, args)
            return next(iter(values.values()), None)
        if _is_key_collection(keys):
            return self._filter(keys, transform, args)
        return None

    def _filter(self, keys: Iterable[Any], transform: Callable[..., Any], args: Sequence[Any]) -> Dict[Any, Any]:
        return {k: transform(v, *args) for k, v in self.get_many(keys).items()}

    def _log(self, level: int, msg: str, *args: Any) -> None:
        if logger.isEnabledFor(level):
            with scoped(self._identifier):
                logger.log(level, msg, *args)

    # --- overlay ---

    def overlay_get(self, name: Any) -> Any:
        if self._overlay_enabled:
            return self.get(name)
        return None

    def overlay_has(self, name: Any) -> bool:
        if self._overlay_enabled:
            return self.has(name)
        return False

    def overlay_set(self, name: Any, value: Any) -> None:
        if self._overlay_enabled:
            self.set(name, value)

    # --- display ---

    def __str__(self) -> str:
        label = type(self).__name__
        if self._identifier:
            return f"{label}: {self._identifier}"
        return f"{label} instance"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(identifier={self._identifier!r}, "
            f"stored={len(self._values)}, overlay_enabled={self._overlay_enabled})"
        )
