"""Tests for font loading and style creation."""

from __future__ import annotations

import pytest

from tokenforge.core.ir import RGBA, ColorStyleDef, TextStyleDef, Tier, TokenDefinition, TokenType
from tokenforge.core.modes import create_collection
from tokenforge.core.resolver import create_variables
from tokenforge.events import LEVEL_WARN
from tokenforge.host.memory import InMemoryHost
from tokenforge.synth.fonts import FontRegistry, weight_to_style
from tokenforge.synth.styles import create_color_styles, create_text_styles

FALLBACK = RGBA(r=0.1, g=0.4, b=0.9)


class TestFontRegistry:
    @pytest.mark.asyncio
    async def test_load_records_failures(self, events):
        host = InMemoryHost(unavailable_fonts=[("Inter", "Extra Bold")])
        fonts = FontRegistry()

        loaded = await fonts.load(host, events=events)

        assert "Extra Bold" not in loaded
        assert fonts.failed == ["Extra Bold"]
        assert fonts.is_loaded("Regular")

    @pytest.mark.asyncio
    async def test_nothing_loaded_warns(self, events):
        host = InMemoryHost(unavailable_fonts=[("Inter", "Regular")])
        fonts = FontRegistry()

        assert await fonts.load(host, styles=["Regular"], events=events) == []
        assert len(events.logs(LEVEL_WARN)) == 1

    @pytest.mark.asyncio
    async def test_load_is_idempotent(self, host):
        fonts = FontRegistry()
        await fonts.load(host, styles=["Regular"])
        calls = host.call_count
        await fonts.load(host, styles=["Regular"])
        assert host.call_count == calls

    def test_resolve_falls_back_to_regular(self):
        fonts = FontRegistry()
        fonts.loaded = ["Regular", "Bold"]
        assert fonts.resolve("Bold") == "Bold"
        assert fonts.resolve("Black") == "Regular"
        fonts.loaded = []
        assert fonts.resolve("Bold") is None

    @pytest.mark.parametrize(
        "weight,style",
        [(400, "Regular"), (600, "Semi Bold"), (900, "Black"), (450, "Regular")],
    )
    def test_weight_to_style(self, weight, style):
        assert weight_to_style(weight) == style


class TestTextStyles:
    @pytest.mark.asyncio
    async def test_unavailable_weight_uses_regular(self, events):
        host = InMemoryHost(unavailable_fonts=[("Inter", "Bold")])
        created = await create_text_styles(
            host, [TextStyleDef(name="Heading/H1", font_weight=700, font_size=32)], events
        )

        assert len(created) == 1
        style = host.styles[0]
        assert style.props["fontName"] == {"family": "Inter", "style": "Regular"}
        assert style.props["lineHeight"] == {"unit": "PERCENT", "value": 150}

    @pytest.mark.asyncio
    async def test_style_skipped_when_fallback_fails(self, events):
        host = InMemoryHost(unavailable_fonts=[("Mono", "Regular"), ("Inter", "Regular")])
        created = await create_text_styles(
            host, [TextStyleDef(name="Code", font_family="Mono")], events
        )

        assert created == []
        assert "Code" in events.logs(LEVEL_WARN)[0].message


class TestColorStyles:
    def _semantic(self, host, symbols):
        collection = create_collection(host, "Semantic", ["Light"])
        create_variables(
            host,
            collection,
            [TokenDefinition(path="color/primary/default", type=TokenType.COLOR, value=FALLBACK)],
            collection.default_mode.id,
            symbols,
            Tier.SEMANTIC,
        )

    def test_bound_to_semantic_variable(self, host, symbols):
        self._semantic(host, symbols)
        create_color_styles(
            host,
            [ColorStyleDef(name="Primary", variable_path="color/primary/default", fallback=FALLBACK)],
            symbols,
        )

        style = host.styles[0]
        assert style.name == "Tokenforge/Primary"
        assert style.props["boundVariable"] == symbols.get("semantic/color/primary/default").handle

    def test_unknown_path_keeps_fallback(self, host, symbols):
        create_color_styles(
            host,
            [ColorStyleDef(name="Accent", variable_path="color/accent", fallback=FALLBACK)],
            symbols,
            namespace="Brand",
        )

        style = host.styles[0]
        assert style.name == "Brand/Accent"
        assert style.props["boundVariable"] is None
        assert style.props["paints"][0]["color"] == {"r": 0.1, "g": 0.4, "b": 0.9}

    def test_empty_namespace(self, host, symbols):
        create_color_styles(
            host,
            [ColorStyleDef(name="Accent", variable_path="x", fallback=FALLBACK)],
            symbols,
            namespace="",
        )
        assert host.styles[0].name == "Accent"
