import pytest

from optionstore.validators.registry import (
    ValidatorRegistry,
    ValidatorRegistryError,
    register_validator,
)


def setup_function() -> None:
    ValidatorRegistry.clear()


def teardown_function() -> None:
    from optionstore.bootstrap import load_builtin_validators

    load_builtin_validators(reload=True)


def test_register_and_get_round_trip():
    def only_a(key):
        return key == "a"

    ValidatorRegistry.register(kind="read", name="only_a", validator=only_a)

    assert ValidatorRegistry.get("read", "only_a") is only_a
    assert ValidatorRegistry.try_get("read", "only_a") is only_a
    assert ValidatorRegistry.try_get("write", "only_a") is None


def test_get_missing_raises_helpful_error():
    with pytest.raises(ValidatorRegistryError, match="No validator registered"):
        ValidatorRegistry.get("write", "nope")


def test_unknown_kind_is_refused():
    with pytest.raises(ValidatorRegistryError, match="Unknown validator kind"):
        ValidatorRegistry.register(kind="delete", name="x", validator=lambda key: True)  # type: ignore[arg-type]


def test_duplicate_registration_raises_by_default():
    ValidatorRegistry.register(kind="read", name="v", validator=lambda key: True)

    with pytest.raises(ValidatorRegistryError, match="already registered"):
        ValidatorRegistry.register(kind="read", name="v", validator=lambda key: False)


def test_overwrite_allows_re_registration():
    def first(key):
        return True

    def second(key):
        return False

    ValidatorRegistry.register(kind="read", name="v", validator=first)
    ValidatorRegistry.register(kind="read", name="v", validator=second, overwrite=True)

    assert ValidatorRegistry.get("read", "v") is second


def test_same_name_for_read_and_write_is_allowed():
    ValidatorRegistry.register(kind="read", name="v", validator=lambda key: True)
    ValidatorRegistry.register(kind="write", name="v", validator=lambda key, value: True)

    assert ValidatorRegistry.names("read") == ["v"]
    assert ValidatorRegistry.names("write") == ["v"]


def test_register_validator_decorator_registers_function():
    @register_validator(kind="write", name="positive")
    def positive(key, value):
        return value > 0

    assert ValidatorRegistry.get("write", "positive") is positive


def test_load_builtin_validators_reload_restores_builtins():
    from optionstore.bootstrap import load_builtin_validators

    load_builtin_validators(reload=True)

    assert "allow_all" in ValidatorRegistry.names("read")
    assert "value_types" in ValidatorRegistry.names("write")


def test_load_builtin_validators_reload_undoes_overrides():
    from optionstore.bootstrap import load_builtin_validators

    load_builtin_validators(reload=True)

    def deny(key, *args):
        return False

    ValidatorRegistry.register(kind="read", name="allow_all", validator=deny, overwrite=True)
    load_builtin_validators()
    assert ValidatorRegistry.get("read", "allow_all") is deny

    load_builtin_validators(reload=True)
    assert ValidatorRegistry.get("read", "allow_all")("any") is True
