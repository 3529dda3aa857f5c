"""Tests for the Component Synthesizer."""

from __future__ import annotations

import pytest

from tokenforge.core.errors import HostError
from tokenforge.core.ir import ComponentCategory, ComponentDefinition
from tokenforge.core.variants import TruncationPolicy
from tokenforge.events import LEVEL_DONE, LEVEL_ERROR
from tokenforge.host.memory import InMemoryHost
from tokenforge.layout import find_overlaps
from tokenforge.synth.synthesizer import ComponentSynthesizer


def _definition(name: str, category: str = "atom", **kwargs) -> ComponentDefinition:
    return ComponentDefinition(name=name, category=category, **kwargs)


class TestSynthesize:
    def test_single_component(self, host, symbols):
        synth = ComponentSynthesizer(host, symbols)
        artifact = synth.synthesize(_definition("Divider"))

        assert artifact.type == "COMPONENT"
        assert artifact.name == "Divider"

    def test_component_set_default_first(self, host, symbols, button_definition):
        synth = ComponentSynthesizer(host, symbols)
        artifact = synth.synthesize(button_definition)

        assert artifact.type == "COMPONENT_SET"
        assert artifact.name == "Button"
        assert len(artifact.children) == 6
        assert artifact.children[0].name == "Size=md, State=default"
        assert (artifact.children[0].x, artifact.children[0].y) == (0, 0)
        assert find_overlaps(artifact.children) == []

    def test_variant_cap(self, host, symbols):
        definition = _definition(
            "Button",
            variants={
                "Variant": ["a", "b", "c"],
                "Size": ["sm", "md", "lg"],
                "State": ["default", "hover", "disabled"],
            },
            default_variant={"Variant": "a", "Size": "md", "State": "default"},
        )
        synth = ComponentSynthesizer(
            host, symbols, variant_cap=10, policy=TruncationPolicy.NEAREST_TO_DEFAULT
        )
        artifact = synth.synthesize(definition)
        assert len(artifact.children) == 10

    def test_grid_uses_last_axis_columns(self, host, symbols, button_definition):
        artifact = ComponentSynthesizer(host, symbols).synthesize(button_definition)
        xs = sorted({child.x for child in artifact.children})
        assert len(xs) == 2

    def test_combine_failure_returns_default_variant(self, symbols, button_definition):
        class NoCombineHost(InMemoryHost):
            def combine_as_variants(self, components, name):
                raise HostError("component sets unsupported")

        artifact = ComponentSynthesizer(NoCombineHost(), symbols).synthesize(button_definition)
        assert artifact.type == "COMPONENT"
        assert artifact.name == "Size=md, State=default"


class TestBuilderFailure:
    """A throwing builder is replaced by a generic artifact and the run continues."""

    def test_failing_builder_gets_generic_fallback(self, host, symbols, events):
        def broken(node, ctx):
            raise RuntimeError("widget exploded")

        definitions = [
            _definition("Badge"),
            _definition("Widget"),
            _definition("Card", "organism"),
        ]
        synth = ComponentSynthesizer(host, symbols, events=events, builders={"Widget": broken})
        result = synth.synthesize_all(definitions)

        assert [a.name for a in result.artifacts] == ["Badge", "Widget", "Card"]
        widget = result.artifacts[1]
        assert widget.type == "COMPONENT"
        # Generic builder labels the node with the component name
        assert widget.find("Widget") is not None
        assert any(child.type == "TEXT" for child in widget.children)

        errors = events.logs(LEVEL_ERROR)
        assert len(errors) == 1
        assert "Widget" in errors[0].message
        assert errors[0].message == "Builder error [Widget]: widget exploded"
        assert result.builder_errors == [errors[0].message]

    def test_partial_node_is_discarded(self, host, symbols):
        def half_built(node, ctx):
            ctx.host.set_properties(node, marker="partial")
            raise ValueError("boom")

        synth = ComponentSynthesizer(host, symbols, builders={"Widget": half_built})
        artifact = synth.synthesize(_definition("Widget"))
        assert "marker" not in artifact.props


class TestSynthesizeAll:
    def test_sections_in_category_order(self, host, symbols, events):
        definitions = [
            _definition("Modal", "organism"),
            _definition("Button"),
            _definition("Input", "molecule"),
        ]
        result = ComponentSynthesizer(host, symbols, events=events).synthesize_all(definitions)

        assert [a.name for a in result.artifacts] == ["Button", "Input", "Modal"]
        assert [s.name for s in result.sections] == ["Atoms", "Molecules", "Organisms"]
        assert [s.y for s in result.sections] == sorted(s.y for s in result.sections)
        assert result.sections[0].y == 0
        assert result.next_y > result.sections[-1].y
        assert [n.name for n in host.page] == ["Atoms", "Molecules", "Organisms"]
        assert [e.message for e in events.logs(LEVEL_DONE)] == [
            "Component: Button",
            "Component: Input",
            "Component: Modal",
        ]

    def test_sections_do_not_overlap(self, host, symbols, button_definition):
        definitions = [button_definition] + [
            _definition(f"Card{i}", "organism") for i in range(12)
        ]
        result = ComponentSynthesizer(host, symbols).synthesize_all(definitions)

        assert find_overlaps(result.sections) == []
        for section in result.sections:
            assert find_overlaps(section.children) == []

    def test_modal_reuses_button_instance(self, host, symbols, button_definition):
        definition = button_definition.model_copy(
            update={
                "variants": {"Variant": ["primary", "secondary"], "Size": ["md"], "State": ["default"]},
                "default_variant": {"Variant": "primary", "Size": "md", "State": "default"},
            }
        )
        result = ComponentSynthesizer(host, symbols).synthesize_all(
            [definition, _definition("Modal", "organism")]
        )
        modal = result.artifacts[1]
        assert any(node.type == "INSTANCE" for node in modal.walk())

    def test_start_y(self, host, symbols):
        result = ComponentSynthesizer(host, symbols).synthesize_all(
            [_definition("Badge")], start_y=400
        )
        assert result.sections[0].y == 400

    @pytest.mark.parametrize("category", list(ComponentCategory))
    def test_every_category_has_a_section(self, host, symbols, category):
        result = ComponentSynthesizer(host, symbols).synthesize_all(
            [_definition("Thing", category.value)]
        )
        assert result.sections[0].name == category.section_title
