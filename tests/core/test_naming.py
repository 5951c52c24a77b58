# tests/core/test_naming.py
"""Tests for name transforms and component-name validation."""

import pytest

from optcompose.core.config import ComposeSettings


class TestNameTransforms:
    """camelize/capitalize used by asset lookup."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("my-widget", "myWidget"),
            ("a-b-c", "aBC"),
            ("plain", "plain"),
            ("trailing-", "trailing-"),
            ("", ""),
        ],
    )
    def test_camelize(self, name: str, expected: str) -> None:
        from optcompose.core.naming import camelize

        assert camelize(name) == expected

    def test_capitalize_only_touches_first_character(self) -> None:
        from optcompose.core.naming import capitalize

        assert capitalize("myWidget") == "MyWidget"
        assert capitalize("x") == "X"
        assert capitalize("") == ""


class TestValidateComponentName:
    """Naming rule and reserved names."""

    @pytest.mark.parametrize("name", ["button", "my-widget", "Nav.Item", "a_1", "café-menu"])
    def test_valid_names(self, name: str) -> None:
        from optcompose.core.naming import validate_component_name

        assert validate_component_name(name, ComposeSettings()) == []

    @pytest.mark.parametrize("name", ["1button", "-x", "has space", "", "bad\n"])
    def test_invalid_shape(self, name: str) -> None:
        from optcompose.core.naming import validate_component_name

        problems = validate_component_name(name, ComposeSettings())
        assert len(problems) == 1
        assert "Invalid component name" in problems[0]

    @pytest.mark.parametrize("name", ["slot", "component", "Slot", "COMPONENT"])
    def test_builtin_names_rejected_case_insensitively(self, name: str) -> None:
        from optcompose.core.naming import validate_component_name

        problems = validate_component_name(name, ComposeSettings())
        assert problems == [f"Do not use built-in or reserved names as component id: {name}"]

    def test_reserved_names_are_exact_match(self) -> None:
        from optcompose.core.naming import validate_component_name

        settings = ComposeSettings(reserved_names=frozenset({"header"}))

        assert validate_component_name("header", settings) != []
        assert validate_component_name("Header", settings) == []
