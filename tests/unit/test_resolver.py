"""Tests for the Variable Resolver, including the resolver + override scenario."""

from __future__ import annotations

from tokenforge.core.ir import (
    NEUTRAL_GRAY,
    RGBA,
    OverrideValue,
    ThemeOverrideSet,
    Tier,
    TokenDefinition,
    TokenType,
)
from tokenforge.core.modes import create_collection
from tokenforge.core.overrides import apply_theme_overrides
from tokenforge.core.resolver import create_variables
from tokenforge.core.symbols import SymbolTable
from tokenforge.events import SynthesisEvents
from tokenforge.host.base import VariableAlias
from tokenforge.host.memory import InMemoryHost
from tokenforge.synth.pipeline import synthesize

BLUE = RGBA(r=0.15, g=0.39, b=0.92)
GRAY = RGBA(r=0.07, g=0.09, b=0.15)
LIGHT_BLUE = RGBA(r=0.38, g=0.65, b=0.98)


def _create_tier(host, symbols, tier, definitions, modes=("Light",)):
    collection = create_collection(host, tier.collection_name, list(modes))
    report = create_variables(
        host, collection, definitions, collection.default_mode.id, symbols, tier
    )
    return collection, report


class TestLiterals:
    def test_literal_values_are_set(self, host, symbols):
        definitions = [
            TokenDefinition(path="color/blue/600", type=TokenType.COLOR, value=BLUE),
            TokenDefinition(path="radius/md", type=TokenType.DIMENSION, value=6),
        ]
        collection, report = _create_tier(host, symbols, Tier.PRIMITIVES, definitions, ["Value"])

        assert report.count == 2
        variable = host.variable_named("color/blue/600", "Primitives")
        assert variable.values[collection.default_mode.id] == BLUE
        assert symbols.resolve_value("primitives/radius/md") == 6

    def test_hex_string_is_coerced(self, host, symbols):
        definition = TokenDefinition.model_validate(
            {"path": "color/white", "type": "color", "value": "#ffffff"}
        )
        _create_tier(host, symbols, Tier.PRIMITIVES, [definition], ["Value"])
        assert symbols.resolve_value("color/white") == RGBA(r=1, g=1, b=1, a=1)

    def test_description_is_forwarded(self, host, symbols):
        definition = TokenDefinition(
            path="spacing/4", type=TokenType.DIMENSION, value=16, description="Base unit"
        )
        _create_tier(host, symbols, Tier.PRIMITIVES, [definition], ["Value"])
        assert host.variable_named("spacing/4", "Primitives").description == "Base unit"

    def test_rejected_literal_falls_back(self, host, symbols):
        # A number is not a valid COLOR value on the host
        definition = TokenDefinition(path="color/bad", type=TokenType.COLOR, value=6)
        _, report = _create_tier(host, symbols, Tier.PRIMITIVES, [definition], ["Value"])

        assert report.fallbacks == ["color/bad"]
        assert "color/bad" in report.created

    def test_host_refusing_every_value_does_not_stop_the_tier(self, symbols):
        host = InMemoryHost(rejected_variables={"color/bad"})
        definitions = [
            TokenDefinition(path="color/bad", type=TokenType.COLOR, value=BLUE),
            TokenDefinition(path="color/ok", type=TokenType.COLOR, value=GRAY),
        ]
        collection, report = _create_tier(host, symbols, Tier.PRIMITIVES, definitions, ["Value"])

        assert list(report.created) == ["color/bad", "color/ok"]
        assert report.fallbacks == ["color/bad"]
        assert host.variable_named("color/bad", "Primitives").values == {}
        assert host.variable_named("color/ok", "Primitives").values == {
            collection.default_mode.id: GRAY
        }
        # No recorded value: reads resolve to the typed default
        assert symbols.resolve_value("primitives/color/bad") == NEUTRAL_GRAY

    def test_rejected_fallback_after_unresolved_alias(self, symbols):
        host = InMemoryHost(rejected_variables={"color/primary"})
        _create_tier(
            host,
            symbols,
            Tier.PRIMITIVES,
            [TokenDefinition(path="color/blue/600", type=TokenType.COLOR, value=BLUE)],
            ["Value"],
        )
        _, report = _create_tier(
            host,
            symbols,
            Tier.SEMANTIC,
            [
                TokenDefinition(
                    path="color/primary", type=TokenType.COLOR, alias_path="missing/blue"
                ),
                TokenDefinition(
                    path="color/text", type=TokenType.COLOR, alias_path="color/blue/600"
                ),
            ],
        )

        assert report.fallbacks == ["color/primary"]
        assert report.aliases_bound == 1

    def test_rejected_values_do_not_fail_the_run(self, payload):
        host = InMemoryHost(rejected_variables={"color/blue/600"})
        events = SynthesisEvents()

        stats = synthesize(payload, host=host, events=events)

        assert stats is not None
        assert stats.variables == 8
        assert not events.failed


class TestAliases:
    def test_alias_binds_to_earlier_tier(self, host, symbols):
        _create_tier(
            host,
            symbols,
            Tier.PRIMITIVES,
            [TokenDefinition(path="color/blue/600", type=TokenType.COLOR, value=BLUE)],
            ["Value"],
        )
        collection, report = _create_tier(
            host,
            symbols,
            Tier.SEMANTIC,
            [
                TokenDefinition(
                    path="color/primary/default",
                    type=TokenType.COLOR,
                    alias_path="primitives/color/blue/600",
                )
            ],
        )

        assert report.aliases_bound == 1
        target = symbols.get("primitives/color/blue/600")
        variable = host.variable_named("color/primary/default", "Semantic")
        assert variable.values[collection.default_mode.id] == VariableAlias(id=target.handle)
        assert symbols.resolve_value("semantic/color/primary/default") == BLUE

    def test_unqualified_alias_uses_lookup_order(self, host, symbols):
        _create_tier(
            host,
            symbols,
            Tier.PRIMITIVES,
            [TokenDefinition(path="radius/md", type=TokenType.DIMENSION, value=6)],
            ["Value"],
        )
        _create_tier(
            host,
            symbols,
            Tier.SEMANTIC,
            [TokenDefinition(path="radius/control", type=TokenType.DIMENSION, alias_path="radius/md")],
        )
        assert symbols.resolve_value("semantic/radius/control") == 6

    def test_forward_reference_gets_typed_default(self, host, symbols):
        # Tier ordering: a semantic token cannot see a component token
        _, report = _create_tier(
            host,
            symbols,
            Tier.SEMANTIC,
            [
                TokenDefinition(
                    path="color/primary/default",
                    type=TokenType.COLOR,
                    alias_path="component/button/bg",
                )
            ],
        )
        _create_tier(
            host,
            symbols,
            Tier.COMPONENT,
            [TokenDefinition(path="button/bg", type=TokenType.COLOR, value=BLUE)],
        )

        assert report.fallbacks == ["color/primary/default"]
        assert symbols.resolve_value("semantic/color/primary/default") == NEUTRAL_GRAY
        assert symbols.fallback_count == 1

    def test_type_mismatch_gets_typed_default(self, host, symbols):
        _create_tier(
            host,
            symbols,
            Tier.PRIMITIVES,
            [TokenDefinition(path="color/blue/600", type=TokenType.COLOR, value=BLUE)],
            ["Value"],
        )
        _, report = _create_tier(
            host,
            symbols,
            Tier.SEMANTIC,
            [
                TokenDefinition(
                    path="radius/control",
                    type=TokenType.DIMENSION,
                    alias_path="primitives/color/blue/600",
                )
            ],
        )
        assert report.fallbacks == ["radius/control"]
        assert symbols.resolve_value("semantic/radius/control") == 0

    def test_alias_closure(self, host, symbols):
        """Every created variable resolves to a concrete value of its type."""
        _create_tier(
            host,
            symbols,
            Tier.PRIMITIVES,
            [TokenDefinition(path="color/blue/600", type=TokenType.COLOR, value=BLUE)],
            ["Value"],
        )
        _create_tier(
            host,
            symbols,
            Tier.SEMANTIC,
            [
                TokenDefinition(
                    path="color/primary/default",
                    type=TokenType.COLOR,
                    alias_path="primitives/color/blue/600",
                ),
                TokenDefinition(
                    path="color/missing", type=TokenType.COLOR, alias_path="primitives/nowhere"
                ),
                TokenDefinition(path="label", type=TokenType.STRING, alias_path="nowhere"),
                TokenDefinition(path="enabled", type=TokenType.BOOLEAN, alias_path="nowhere"),
            ],
        )

        for variable in symbols.variables():
            value = symbols.resolve_value(variable)
            assert value is not None
            if variable.type == TokenType.COLOR:
                assert isinstance(value, RGBA)
        assert symbols.resolve_value("semantic/label") == ""
        assert symbols.resolve_value("semantic/enabled") is False


class TestConflicts:
    def test_duplicate_path_in_collection_is_skipped(self, host, symbols):
        definitions = [
            TokenDefinition(path="radius/md", type=TokenType.DIMENSION, value=6),
            TokenDefinition(path="radius/md", type=TokenType.DIMENSION, value=8),
        ]
        _, report = _create_tier(host, symbols, Tier.PRIMITIVES, definitions, ["Value"])

        assert report.count == 1
        assert report.skipped_conflicts == 1
        assert symbols.resolve_value("radius/md") == 6

    def test_same_path_in_other_collection_is_allowed(self, host, symbols):
        _create_tier(
            host,
            symbols,
            Tier.PRIMITIVES,
            [TokenDefinition(path="radius/md", type=TokenType.DIMENSION, value=6)],
            ["Value"],
        )
        _, report = _create_tier(
            host,
            symbols,
            Tier.SEMANTIC,
            [TokenDefinition(path="radius/md", type=TokenType.DIMENSION, alias_path="primitives/radius/md")],
        )
        assert report.count == 1
        assert report.skipped_conflicts == 0


class TestThemeScenario:
    """Two primitives, a semantic alias, a component alias and one Dark override."""

    def test_component_token_follows_theme_override(self, host, events):
        symbols = SymbolTable()
        _create_tier(
            host,
            symbols,
            Tier.PRIMITIVES,
            [
                TokenDefinition(path="color/blue/600", type=TokenType.COLOR, value=BLUE),
                TokenDefinition(path="color/gray/900", type=TokenType.COLOR, value=GRAY),
            ],
            ["Value"],
        )
        semantic, _ = _create_tier(
            host,
            symbols,
            Tier.SEMANTIC,
            [
                TokenDefinition(
                    path="color/primary/default",
                    type=TokenType.COLOR,
                    alias_path="primitives/color/blue/600",
                )
            ],
            ["Light", "Dark"],
        )
        _create_tier(
            host,
            symbols,
            Tier.COMPONENT,
            [
                TokenDefinition(
                    path="button/primary/bg",
                    type=TokenType.COLOR,
                    alias_path="semantic/color/primary/default",
                )
            ],
            ["Light", "Dark"],
        )

        themes = {
            "dark": ThemeOverrideSet(
                theme_key="dark",
                overrides={
                    "semantic/color/primary/default": OverrideValue(
                        value=LIGHT_BLUE, type=TokenType.COLOR
                    )
                },
            )
        }
        results = apply_theme_overrides(host, semantic, themes, symbols, "semantic", events)

        assert results["Dark"].applied == 1
        assert symbols.resolve_value("component/button/primary/bg", "Dark") == LIGHT_BLUE
        assert symbols.resolve_value("component/button/primary/bg", "Light") == BLUE
