from optionstore.validators.registry import (
    ValidatorRegistry,
    ValidatorRegistryError,
    register_validator,
)

__all__ = [
    "ValidatorRegistry",
    "ValidatorRegistryError",
    "register_validator",
]
