"""Tests for DTCG token tree transformation."""

from __future__ import annotations

import json
import logging

import pytest

from tokenforge.core.dtcg import (
    build_dark_overrides,
    build_theme_overrides,
    is_reference,
    load_token_dir,
    ref_to_path,
    tier_definitions,
    transform_token_tree,
    walk_tokens,
)
from tokenforge.core.errors import PayloadError
from tokenforge.core.ir import RGBA, TokenDefinition, TokenType


class TestTreeHelpers:
    def test_walk_inherits_group_type(self):
        tree = {
            "primitive": {
                "color": {
                    "$type": "color",
                    "blue": {"600": {"$value": "#2563eb", "$description": "Brand"}},
                },
                "space": {"4": {"$type": "dimension", "$value": "16px"}},
            }
        }
        tokens = walk_tokens(tree)

        assert [t.path for t in tokens] == [
            ("primitive", "color", "blue", "600"),
            ("primitive", "space", "4"),
        ]
        assert tokens[0].type == "color"
        assert tokens[0].description == "Brand"
        assert tokens[1].type == "dimension"

    def test_leaf_type_overrides_group(self):
        tree = {"g": {"$type": "color", "w": {"$type": "fontWeight", "$value": 600}}}
        assert walk_tokens(tree)[0].type == "fontWeight"

    @pytest.mark.parametrize(
        "value,expected",
        [("{semantic.a}", True), ("#fff", False), (12, False), ("{broken", False)],
    )
    def test_is_reference(self, value, expected):
        assert is_reference(value) is expected

    def test_ref_to_path(self):
        assert ref_to_path("{primitive.radius.md}") == "primitives/radius/md"
        assert ref_to_path("{component.button.bg}") == "component/button/bg"


class TestTierDefinitions:
    def test_literals_and_aliases(self):
        tree = {
            "semantic": {
                "color": {"$type": "color", "primary": {"$value": "{primitive.color.blue.600}"}},
                "radius": {"$type": "dimension", "control": {"$value": "0.5rem"}},
                "font": {"$type": "fontFamily", "body": {"$value": "Inter"}},
            }
        }
        definitions = {d.path: d for d in tier_definitions([tree])}

        assert set(definitions) == {"color/primary", "radius/control"}
        assert definitions["color/primary"].alias_path == "primitives/color/blue/600"
        assert definitions["radius/control"].value == 8

    def test_primitives_never_alias(self):
        tree = {"primitive": {"c": {"$type": "color", "$value": "{primitive.other}"}}}
        assert tier_definitions([tree], allow_aliases=False) == []

    def test_later_tree_replaces_earlier(self):
        first = {"primitive": {"n": {"$type": "number", "$value": 1}}}
        second = {"primitive": {"n": {"$type": "number", "$value": 2}}}
        definitions = tier_definitions([first, second])
        assert len(definitions) == 1
        assert definitions[0].value == 2


class TestThemeOverrides:
    def test_values_are_typed(self):
        themes = build_theme_overrides(
            {
                "glass": {
                    "label": "Glass",
                    "overrides": {
                        "semantic.surface.card": "rgba(255, 255, 255, 0.6)",
                        "component.card.radius": "1rem",
                        "semantic.surface.gradient": "linear-gradient(#fff, #000)",
                    },
                }
            }
        )
        glass = themes["glass"]

        assert glass.theme_key == "glass"
        assert set(glass.overrides) == {"semantic/surface/card", "component/card/radius"}
        assert glass.overrides["semantic/surface/card"].value == RGBA(r=1, g=1, b=1, a=0.6)
        assert glass.overrides["component/card/radius"].value == 16
        assert glass.overrides["component/card/radius"].type == TokenType.NUMBER

    def test_primitive_overrides_dropped_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="tokenforge.core.dtcg"):
            themes = build_theme_overrides(
                {"brutalist": {"overrides": {"primitive.color.black": "#000000"}}}
            )
        assert themes["brutalist"].overrides == {}
        assert themes["brutalist"].label == "brutalist"
        assert "skipped 1 primitive override" in caplog.text

    def test_dark_namespace(self):
        primitives = [
            TokenDefinition(path="color/blue/400", type=TokenType.COLOR, value="#60a5fa"),
        ]
        tree = {
            "semantic": {
                "color": {
                    "dark": {
                        "primary": {"default": {"$value": "{primitive.color.blue.400}"}},
                        "surface": {"$value": "#0f172a"},
                        "missing": {"$value": "{primitive.color.none}"},
                    }
                }
            }
        }
        overrides = build_dark_overrides(tree, primitives)

        assert set(overrides) == {"semantic/color/primary/default", "semantic/color/surface"}
        assert overrides["semantic/color/primary/default"].value.to_hex() == "#60a5fa"


class TestTransform:
    def test_stats(self):
        payload = transform_token_tree(
            [{"primitive": {"c": {"$type": "color", "$value": "#fff"}}}],
            [{"semantic": {"bg": {"$type": "color", "$value": "{primitive.c}"}}}],
            [],
        )
        stats = payload.meta["stats"]
        assert payload.meta["generator"] == "tokenforge-transform"
        assert stats["totalVars"] == 2
        assert stats["componentVars"] == 0
        assert payload.variables.semantic[0].alias_path == "primitives/c"

    def test_dark_merges_into_existing_theme(self):
        payload = transform_token_tree(
            [{"primitive": {"c": {"$type": "color", "$value": "#000000"}}}],
            [],
            [],
            {"dark": {"label": "Midnight", "overrides": {"semantic.text": "#ffffff"}}},
            dark={"semantic": {"color": {"dark": {"bg": {"$value": "{primitive.c}"}}}}},
        )
        dark = payload.themes["dark"]
        assert dark.label == "Midnight"
        assert set(dark.overrides) == {"semantic/text", "semantic/color/bg"}


class TestLoadTokenDir:
    def test_directory(self, tokens_dir):
        payload = load_token_dir(tokens_dir)

        assert [d.path for d in payload.variables.primitives] == [
            "color/blue/600",
            "color/blue/400",
            "color/gray/900",
            "radius/md",
        ]
        assert payload.variables.component[0].alias_path == "semantic/color/primary/default"
        assert payload.meta["stats"]["totalVars"] == 7
        glass = payload.themes["glass"]
        assert glass.label == "Glass"
        assert set(glass.overrides) == {
            "semantic/color/primary/default",
            "semantic/radius/control",
        }

    def test_catalog(self, tokens_dir):
        (tokens_dir / "catalog.json").write_text(
            json.dumps(
                {
                    "components": [{"name": "Badge", "tokens": {"fill": "semantic/color/primary/default"}}],
                    "textStyles": [{"name": "Body", "fontSize": 14}],
                }
            )
        )
        payload = load_token_dir(tokens_dir)
        assert [c.name for c in payload.components] == ["Badge"]
        assert payload.text_styles[0].font_size == 14
        assert payload.meta["stats"]["components"] == 1

    def test_missing_directory(self, tmp_path):
        with pytest.raises(PayloadError, match="Token directory not found"):
            load_token_dir(tmp_path / "nope")

    def test_unreadable_file(self, tokens_dir):
        (tokens_dir / "primitives" / "broken.json").write_text("{not json")
        with pytest.raises(PayloadError, match="Cannot read token file"):
            load_token_dir(tokens_dir)
