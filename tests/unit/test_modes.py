"""Tests for the Collection & Mode Manager."""

from __future__ import annotations

import pytest

from tokenforge.core.modes import THEME_MODES, create_collection, theme_key_for
from tokenforge.events import LEVEL_WARN
from tokenforge.host.memory import InMemoryHost


class TestCreateCollection:
    def test_default_mode_is_renamed(self, host, events):
        collection = create_collection(host, "Primitives", ["Value"], events)
        assert collection.mode_names == ["Value"]
        assert host.collection_named("Primitives") is collection

    def test_all_theme_modes(self, host, events):
        collection = create_collection(host, "Semantic", THEME_MODES, events)
        assert collection.mode_names == list(THEME_MODES)
        assert collection.default_mode.name == "Light"
        assert not events.logs(LEVEL_WARN)

    def test_mode_cap_degrades_gracefully(self, events):
        host = InMemoryHost(max_modes=4)
        collection = create_collection(host, "Semantic", THEME_MODES, events)

        assert collection.mode_names == ["Light", "Dark", "Glass", "Neumorphic"]
        warnings = events.logs(LEVEL_WARN)
        assert len(warnings) == 3
        assert 'Could not add mode "Brutalist" to Semantic' in warnings[0].message
        assert "(plan may limit modes to 4)" in warnings[0].message

    def test_summary_log(self, host, events):
        create_collection(host, "Component", ["Light", "Dark"], events)
        assert events.logs()[-1].message == '  Collection "Component": 2 modes created'

    def test_requires_a_mode_name(self, host):
        with pytest.raises(ValueError):
            create_collection(host, "Empty", [])


class TestThemeKeys:
    @pytest.mark.parametrize(
        "mode, key",
        [("Dark", "dark"), ("Dark Luxury", "darkLuxury"), ("Glass", "glass"), ("Light", None)],
    )
    def test_builtin_mapping(self, mode, key):
        assert theme_key_for(mode) == key

    def test_custom_mapping(self):
        assert theme_key_for("High Contrast", {"High Contrast": "hc"}) == "hc"
        assert theme_key_for("Dark", {"High Contrast": "hc"}) is None
