"""Tests for discovery.py -- configurators, context and from_python()."""

import math
from datetime import date

import pytest

from config_snapshot.discovery import (
    CallableRoot,
    ConfigurationContext,
    RootConfigurator,
    StaticRoot,
    describe_roots,
    from_python,
    mapping_key,
)
from config_snapshot.errors import ConfiguratorError
from config_snapshot.model import Mapping, Scalar, ScalarFormat, Sequence


class TestFromPython:
    """Tests for from_python()."""

    def test_none_is_empty_scalar(self):
        assert from_python(None) == Scalar(None)

    def test_bool_is_raw_boolean(self):
        assert from_python(True) == Scalar("true", ScalarFormat.BOOLEAN, raw=True)
        assert from_python(False) == Scalar("false", ScalarFormat.BOOLEAN, raw=True)

    def test_int_is_raw_number(self):
        assert from_python(42) == Scalar("42", ScalarFormat.NUMBER, raw=True)

    def test_float_is_raw_floating(self):
        assert from_python(1.5) == Scalar("1.5", ScalarFormat.FLOATING, raw=True)

    def test_special_floats_use_yaml_spelling(self):
        assert from_python(math.inf).value == ".inf"
        assert from_python(-math.inf).value == "-.inf"
        assert from_python(math.nan).value == ".nan"

    def test_plain_string(self):
        assert from_python("hello") == Scalar("hello")

    def test_multiline_string(self):
        assert from_python("a\nb") == Scalar("a\nb", ScalarFormat.MULTILINE_STRING)

    def test_date_is_iso_string(self):
        assert from_python(date(2024, 1, 31)) == Scalar("2024-01-31")

    def test_dict_keeps_insertion_order_and_stringifies_keys(self):
        node = from_python({"b": 1, 2: "x"})
        assert isinstance(node, Mapping)
        assert node.keys() == ["b", "2"]

    def test_bool_and_none_keys_use_yaml_spelling(self):
        node = from_python({True: 1, False: 2, None: 3})
        assert node.keys() == ["true", "false", "null"]

    def test_bool_key_does_not_clash_with_python_spelling(self):
        node = from_python({True: 1, "True": 2})
        assert node.keys() == ["true", "True"]

    def test_list_and_tuple_are_sequences(self):
        assert from_python(["a", "b"]) == Sequence.of([Scalar("a"), Scalar("b")])
        assert from_python(("a",)) == Sequence.of([Scalar("a")])

    def test_unsupported_type_raises(self):
        with pytest.raises(ConfiguratorError, match="object"):
            from_python({"bad": object()})


class TestDescribeRoots:
    """Tests for describe_roots()."""

    def test_registration_order(self, static_roots):
        names = [name for name, _ in describe_roots(static_roots, ConfigurationContext())]
        assert names == ["zeta", "empty", "alpha"]

    def test_none_description_skipped(self):
        class Quiet:
            name = "quiet"

            def describe(self, context):
                return None

        roots = [Quiet(), StaticRoot("loud", 1)]
        assert [n for n, _ in describe_roots(roots, ConfigurationContext())] == ["loud"]

    def test_context_passed_to_configurators(self):
        app = {"port": 9090}
        root = CallableRoot("server", lambda source: {"port": source["port"]})
        [(name, node)] = describe_roots([root], ConfigurationContext(source=app))
        assert name == "server"
        assert node == Mapping.of({"port": Scalar("9090", ScalarFormat.NUMBER, raw=True)})

    def test_unexpected_error_wrapped_with_root_name(self):
        def reader(source):
            raise KeyError("missing")

        with pytest.raises(ConfiguratorError, match="'broken'") as exc_info:
            list(describe_roots([CallableRoot("broken", reader)], ConfigurationContext()))
        assert exc_info.value.root == "broken"
        assert isinstance(exc_info.value.__cause__, KeyError)

    def test_configurator_error_propagates_unchanged(self):
        original = ConfiguratorError("nope", root="x")

        class Failing:
            name = "x"

            def describe(self, context):
                raise original

        with pytest.raises(ConfiguratorError) as exc_info:
            list(describe_roots([Failing()], ConfigurationContext()))
        assert exc_info.value is original

    def test_static_root_satisfies_protocol(self):
        assert isinstance(StaticRoot("a", 1), RootConfigurator)


class TestMappingKey:
    """Tests for mapping_key()."""

    @pytest.mark.parametrize(
        "key, text",
        [
            (True, "true"),
            (False, "false"),
            (None, "null"),
            (3, "3"),
            (1.5, "1.5"),
            ("on", "on"),
        ],
    )
    def test_spelling(self, key, text):
        assert mapping_key(key) == text
