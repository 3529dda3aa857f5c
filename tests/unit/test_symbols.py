"""Tests for the Symbol Table."""

from __future__ import annotations

from tokenforge.core.ir import NEUTRAL_GRAY, RGBA, Tier, TokenType
from tokenforge.core.symbols import SymbolTable

BLUE = RGBA(r=0.15, g=0.39, b=0.92)
RED = RGBA(r=0.86, g=0.15, b=0.15)


class TestRegistration:
    """Bare and qualified keys."""

    def test_register_adds_bare_and_qualified_keys(self, symbols, make_var):
        variable = make_var("color/primary/default")
        symbols.register(variable)

        assert symbols.get("color/primary/default") is variable
        assert symbols.get("semantic/color/primary/default") is variable
        assert "semantic/color/primary/default" in symbols
        assert len(symbols) == 1

    def test_later_registration_supersedes(self, symbols, make_var):
        first = make_var("radius/md", Tier.PRIMITIVES, handle="h1")
        second = make_var("radius/md", Tier.SEMANTIC, handle="h2")
        symbols.register(first)
        symbols.register(second)

        # The bare key now points at the later variable, qualified keys stay distinct
        assert symbols.get("radius/md") is second
        assert symbols.get("primitives/radius/md") is first
        assert symbols.get("semantic/radius/md") is second

    def test_variables_are_distinct(self, symbols, make_var):
        symbols.register(make_var("a"))
        symbols.register(make_var("b"))
        assert [v.path for v in symbols.variables()] == ["a", "b"]

    def test_empty_table(self):
        table = SymbolTable()
        assert table.is_empty
        assert table.lookup("anything") is None


class TestLookup:
    """Raw key first, then component/, semantic/, primitives/."""

    def test_raw_key_wins(self, symbols, make_var):
        variable = make_var("color/x", Tier.PRIMITIVES)
        symbols.register(variable)
        assert symbols.lookup("primitives/color/x") is variable

    def test_prefix_order(self, symbols, make_var):
        prim = make_var("border/default", Tier.PRIMITIVES, handle="p")
        sem = make_var("border/default", Tier.SEMANTIC, handle="s")
        symbols.register(prim)
        symbols.register(sem)
        symbols._entries.pop("border/default")

        assert symbols.lookup("border/default") is sem

    def test_component_before_semantic(self, symbols, make_var):
        sem = make_var("card/radius", Tier.SEMANTIC, handle="s", token_type=TokenType.NUMBER)
        comp = make_var("card/radius", Tier.COMPONENT, handle="c", token_type=TokenType.NUMBER)
        symbols.register(comp)
        symbols.register(sem)
        symbols._entries.pop("card/radius")

        assert symbols.lookup("card/radius") is comp

    def test_get_does_not_search_prefixes(self, symbols, make_var):
        symbols.register(make_var("text/default"))
        symbols._entries.pop("text/default")
        assert symbols.get("text/default") is None
        assert symbols.lookup("text/default") is not None


class TestValueResolution:
    """Per-mode values, default-mode fallback, alias following."""

    def test_unset_mode_falls_back_to_default(self, symbols, semantic_collection, make_var):
        variable = make_var("color/primary/default")
        symbols.register_collection(semantic_collection)
        symbols.register(variable)
        symbols.record_value(variable, "m-light", BLUE)

        assert symbols.resolve_value(variable, "Light") == BLUE
        assert symbols.resolve_value(variable, "Dark") == BLUE
        assert symbols.resolve_value(variable, "Unknown Mode") == BLUE

    def test_mode_value_overrides_default(self, symbols, semantic_collection, make_var):
        variable = make_var("color/primary/default")
        symbols.register_collection(semantic_collection)
        symbols.register(variable)
        symbols.record_value(variable, "m-light", BLUE)
        symbols.record_value(variable, "m-dark", RED)

        assert symbols.resolve_value("color/primary/default", "Dark") == RED
        assert symbols.resolve_value("color/primary/default") == BLUE

    def test_alias_is_followed(self, symbols, semantic_collection, make_var):
        target = make_var("color/blue", handle="t")
        alias = make_var("color/primary", handle="a")
        symbols.register_collection(semantic_collection)
        symbols.register(target)
        symbols.register(alias)
        symbols.record_value(target, "m-light", BLUE)
        symbols.record_alias(alias, "m-light", target)

        assert symbols.resolve_value("color/primary", "Light") == BLUE

    def test_cycle_yields_typed_default(self, symbols, semantic_collection, make_var):
        a = make_var("a", handle="ha")
        b = make_var("b", handle="hb")
        symbols.register_collection(semantic_collection)
        symbols.register(a)
        symbols.register(b)
        symbols.record_alias(a, "m-light", b)
        symbols.record_alias(b, "m-light", a)

        assert symbols.resolve_value("a") == NEUTRAL_GRAY

    def test_unknown_path_is_none(self, symbols):
        assert symbols.resolve_value("nope") is None

    def test_fallback_count(self, symbols):
        symbols.note_fallback()
        symbols.note_fallback()
        assert symbols.fallback_count == 2
