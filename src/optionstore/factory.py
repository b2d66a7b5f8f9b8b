"""Build option stores from declarative configuration."""

from __future__ import annotations

from typing import Any, Mapping, Union

from pydantic import ValidationError

from optionstore.bootstrap import load_builtin_validators
from optionstore.core.exceptions import StoreConfigError
from optionstore.core.logger import get_logger, scoped
from optionstore.core.store import OptionStore
from optionstore.models.store_config import StoreConfig
from optionstore.validators.registry import ValidatorRegistry

logger = get_logger(__name__)


def parse_config(config: Union[StoreConfig, Mapping[str, Any]]) -> StoreConfig:
    """Validate a mapping into a StoreConfig.

    Raises:
        StoreConfigError: If the mapping does not describe a valid store
    """
    if isinstance(config, StoreConfig):
        return config
    try:
        return StoreConfig.model_validate(dict(config))
    except ValidationError as exc:
        raise StoreConfigError(
            reason="Invalid option store configuration",
            details=exc.errors(include_url=False),
        ) from exc


def build_store(config: Union[StoreConfig, Mapping[str, Any]]) -> OptionStore:
    """
    Build an OptionStore from a StoreConfig or an equivalent mapping.

    Validators are resolved by name through ValidatorRegistry and installed
    before the seed values are written, so seeding obeys the write validator.

    Raises:
        StoreConfigError: If the configuration is malformed
        ValidatorRegistryError: If a validator name is not registered

    Example:
        >>> store = build_store({
        ...     "identifier": "db",
        ...     "write_validator": {"name": "allowed_keys", "args": ["host", "port"]},
        ...     "values": {"host": "localhost", "user": "admin"},
        ... })
        >>> store.get()
        {'host': 'localhost'}
    """
    cfg = parse_config(config)
    load_builtin_validators()

    store = OptionStore(cfg.identifier)
    store.overlay_enabled = cfg.overlay_enabled

    with scoped(cfg.identifier):
        if cfg.read_validator is not None:
            fn = ValidatorRegistry.get("read", cfg.read_validator.name)
            store.set_read_validator(fn, cfg.read_validator.args)
        if cfg.write_validator is not None:
            fn = ValidatorRegistry.get("write", cfg.write_validator.name)
            store.set_write_validator(fn, cfg.write_validator.args)

        result = store.set_with_result(cfg.values)
        logger.info(
            "Built %s with %d seeded value(s), %d rejected",
            store,
            len(result.accepted),
            len(result.rejected),
        )
    return store
