# tests/options/test_normalize.py
"""Tests for field normalization."""

from typing import Any

from optcompose.core.diagnostics import Diagnostics
from tests.fixtures.logs import CapturedLogs


class TestNormalizeProps:
    """props: sequence or mapping -> {canonicalName: spec}."""

    def test_sequence_of_names(self, diagnostics: Diagnostics) -> None:
        from optcompose.options.normalize import normalize_props

        assert normalize_props(["my-prop", "count"], diagnostics) == {
            "myProp": {"type": None},
            "count": {"type": None},
        }

    def test_mapping_wraps_bare_types(self, diagnostics: Diagnostics) -> None:
        from optcompose.options.normalize import normalize_props

        spec = {"type": str, "default": "x"}
        normalized = normalize_props({"count": int, "my-label": spec}, diagnostics)

        assert normalized == {"count": {"type": int}, "myLabel": spec}
        assert normalized["myLabel"] is spec

    def test_non_string_sequence_entries_skipped(self, diagnostics: Diagnostics, captured: CapturedLogs) -> None:
        from optcompose.options.normalize import normalize_props

        assert normalize_props(["ok", 3], diagnostics) == {"ok": {"type": None}}
        assert captured.warned("props must be strings")

    def test_non_string_mapping_keys_skipped(self, diagnostics: Diagnostics, captured: CapturedLogs) -> None:
        from optcompose.options.normalize import normalize_props

        assert normalize_props({1: int, "ok": str}, diagnostics) == {"ok": {"type": str}}
        assert captured.warned("props keys must be strings")

    def test_invalid_shape_clears_field(self, diagnostics: Diagnostics, captured: CapturedLogs) -> None:
        from optcompose.options.normalize import normalize_props

        assert normalize_props(42, diagnostics) == {}
        assert captured.warned('Invalid value for option "props"')

    def test_absent_untouched(self, diagnostics: Diagnostics) -> None:
        from optcompose.contracts.sentinels import MISSING
        from optcompose.options.normalize import normalize_props

        assert normalize_props(None, diagnostics) is None
        assert normalize_props(MISSING, diagnostics) is MISSING

    def test_idempotent(self, diagnostics: Diagnostics) -> None:
        from optcompose.options.normalize import normalize_props

        once = normalize_props(["a-b", "c"], diagnostics)
        assert normalize_props(once, diagnostics) == once


class TestNormalizeInject:
    """inject: sequence or mapping -> {localKey: {"from": ...}}."""

    def test_sequence(self, diagnostics: Diagnostics) -> None:
        from optcompose.options.normalize import normalize_inject

        assert normalize_inject(["theme", "locale"], diagnostics) == {
            "theme": {"from": "theme"},
            "locale": {"from": "locale"},
        }

    def test_mapping_of_source_keys(self, diagnostics: Diagnostics) -> None:
        from optcompose.options.normalize import normalize_inject

        assert normalize_inject({"t": "theme"}, diagnostics) == {"t": {"from": "theme"}}

    def test_mapping_of_specs_defaults_from(self, diagnostics: Diagnostics) -> None:
        from optcompose.options.normalize import normalize_inject

        normalized = normalize_inject({"theme": {"default": "dark"}, "loc": {"from": "locale"}}, diagnostics)

        assert normalized == {
            "theme": {"from": "theme", "default": "dark"},
            "loc": {"from": "locale"},
        }

    def test_invalid_shape_clears_field(self, diagnostics: Diagnostics, captured: CapturedLogs) -> None:
        from optcompose.options.normalize import normalize_inject

        assert normalize_inject("theme", diagnostics) == {}
        assert captured.warned('Invalid value for option "inject"')

    def test_no_diagnostic_outside_debug(self, captured: CapturedLogs) -> None:
        from optcompose.core.config import ComposeSettings
        from optcompose.options.normalize import normalize_inject

        quiet = Diagnostics(ComposeSettings(debug=False))

        assert normalize_inject(7, quiet) == {}
        assert captured.entries == []


class TestNormalizeDirectives:
    """directives: bare function -> {bind: fn, update: fn}."""

    def test_function_shorthand_expanded(self) -> None:
        from optcompose.options.normalize import normalize_directives

        def focus(*args: Any) -> None:
            pass

        hooks = {"inserted": focus}
        assert normalize_directives({"focus": focus, "other": hooks}) == {
            "focus": {"bind": focus, "update": focus},
            "other": hooks,
        }

    def test_asset_table_untouched(self) -> None:
        from optcompose.options.assets import AssetTable
        from optcompose.options.normalize import normalize_directives

        table = AssetTable({"focus": len})
        assert normalize_directives(table) is table


class TestNormalizeDefinition:
    """Whole-definition normalization."""

    def test_does_not_mutate_input(self, diagnostics: Diagnostics) -> None:
        from optcompose.options.normalize import normalize_definition

        definition: dict[str, Any] = {"props": ["a"], "inject": ["b"], "data": {"x": 1}}
        snapshot = dict(definition)

        normalize_definition(definition, diagnostics)

        assert definition == snapshot
        assert definition["props"] == ["a"]

    def test_state_and_provide_tagged(self, diagnostics: Diagnostics) -> None:
        from optcompose.contracts.deferred import Factory, Value
        from optcompose.options.normalize import normalize_definition

        def provide() -> dict[str, int]:
            return {"x": 1}

        normalized = normalize_definition({"data": {"count": 0}, "provide": provide}, diagnostics)

        assert normalized["data"] == Value({"count": 0})
        assert normalized["provide"] == Factory(provide)

    def test_unknown_fields_copied_through(self, diagnostics: Diagnostics) -> None:
        from optcompose.options.normalize import normalize_definition

        marker = object()
        assert normalize_definition({"custom": marker}, diagnostics)["custom"] is marker
