import io
import logging

import pytest

from optionstore.core.exceptions import RejectionPolicy
from optionstore.core.logger import (
    configure_package_logger,
    current_scope,
    get_logger,
    push_scope,
    reset_scope,
    scoped,
    unconfigure_package_logger,
)
from optionstore.core.store import OptionStore
from optionstore.factory import build_store


@pytest.fixture
def package_stream():
    stream = io.StringIO()
    configure_package_logger("DEBUG", stream=stream)
    yield stream
    unconfigure_package_logger()


@pytest.fixture
def root_stream():
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("ROOT %(message)s"))
    root = logging.getLogger()
    root.addHandler(handler)
    yield stream
    root.removeHandler(handler)


def _reject_all(key, value):
    return False


def test_get_logger_nests_under_package_namespace():
    assert get_logger("custom").name == "optionstore.custom"
    assert get_logger("optionstore.core.store").name == "optionstore.core.store"


def test_import_installs_no_handler():
    package_logger = logging.getLogger("optionstore")
    assert package_logger.handlers == []
    assert package_logger.propagate is True


def test_configure_is_idempotent(package_stream):
    configure_package_logger("INFO")
    package_logger = logging.getLogger("optionstore")

    assert len(package_logger.handlers) == 1
    assert package_logger.level == logging.INFO


def test_root_logger_is_untouched(package_stream):
    assert all(h.stream is not package_stream for h in logging.getLogger().handlers if hasattr(h, "stream"))


def test_one_line_per_record_when_root_and_package_handlers_exist(package_stream, root_stream):
    store = OptionStore("x")
    store.set_write_validator(_reject_all)

    store.set_with_result("a", 1, on_reject=RejectionPolicy.WARN)

    warnings = [line for line in package_stream.getvalue().splitlines() if "WARNING" in line]
    assert len(warnings) == 1
    assert root_stream.getvalue() == ""


def test_records_reach_root_once_without_package_handler(root_stream):
    store = OptionStore("x")
    store.set_write_validator(_reject_all)

    store.set_with_result("a", 1, on_reject=RejectionPolicy.WARN)

    assert root_stream.getvalue().splitlines() == ["ROOT Write rejected on OptionStore: x for keys ['a']"]


def test_store_log_lines_carry_identifier_scope(package_stream):
    store = OptionStore("db")
    store.set_write_validator(_reject_all)
    store.set("a", 1)

    lines = package_stream.getvalue().splitlines()
    assert lines
    assert all("scope=db" in line for line in lines)
    assert current_scope() == "-"


def test_anonymous_store_uses_default_scope(package_stream):
    OptionStore().reset()
    assert "scope=- | Values cleared" in package_stream.getvalue()


def test_build_store_logs_under_identifier_scope(package_stream):
    build_store({"identifier": "cfg", "values": {"a": 1}})

    built = [line for line in package_stream.getvalue().splitlines() if "Built" in line]
    assert len(built) == 1
    assert "scope=cfg" in built[0]


def test_host_scope_is_kept_for_anonymous_store(package_stream):
    with scoped("host-a"):
        OptionStore().reset()
    assert "scope=host-a" in package_stream.getvalue()


def test_scope_context_manager():
    assert current_scope() == "-"
    with scoped("settings"):
        assert current_scope() == "settings"
    assert current_scope() == "-"


def test_push_scope_ignores_empty_label():
    assert push_scope("") is None
    reset_scope(None)
    token = push_scope("db")
    assert current_scope() == "db"
    reset_scope(token)
    assert current_scope() == "-"
