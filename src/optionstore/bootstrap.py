from __future__ import annotations

import importlib
import sys
from typing import Iterable

from optionstore.validators.registry import ValidatorRegistry


# Modules whose @register_validator decorators populate ValidatorRegistry
BUILTIN_VALIDATOR_MODULES: tuple[str, ...] = (
    "optionstore.validators.builtin",
)


_LOADED = False


def load_builtin_validators(*, reload: bool = False, modules: Iterable[str] = BUILTIN_VALIDATOR_MODULES) -> None:
    """Make sure the built-in validators are registered under their names.

    Registration happens as a side effect of importing ``modules``, so the
    first call imports them and later calls return immediately. Pass
    ``reload=True`` after ``ValidatorRegistry.clear()`` (or to undo custom
    overrides of built-in names): the registry is emptied and each module is
    executed again, restoring the stock name -> predicate table.
    """

    global _LOADED

    if _LOADED and not reload:
        return

    modules = tuple(modules)

    if reload:
        ValidatorRegistry.clear()
        for module_name in modules:
            sys.modules.pop(module_name, None)

    for module_name in modules:
        importlib.import_module(module_name)

    _LOADED = True
