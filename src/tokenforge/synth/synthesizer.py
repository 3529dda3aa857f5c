"""
Component Synthesizer.

Turns component definitions into host components: one artifact per
definition without variants, or a component set of up to ``variant_cap``
variants arranged on a grid. Artifacts are then grouped into category
sections and placed on the page.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tokenforge.core.errors import HostError
from tokenforge.core.ir import CATEGORY_ORDER, ComponentCategory, ComponentDefinition
from tokenforge.core.symbols import SymbolTable
from tokenforge.core.variants import (
    DEFAULT_VARIANT_CAP,
    TruncationPolicy,
    VariantCombination,
    combination_name,
    variant_set,
)
from tokenforge.events import LEVEL_DONE, LEVEL_ERROR, SynthesisEvents, noop
from tokenforge.layout import SectionLayout, arrange_sections, arrange_variant_grid
from tokenforge.layout.grid import DEFAULT_GAP
from tokenforge.layout.sections import (
    DEFAULT_MAX_ROW_WIDTH,
    DEFAULT_PADDING,
    DEFAULT_SECTION_GAP,
)
from tokenforge.layout.sections import DEFAULT_GAP as DEFAULT_SECTION_ITEM_GAP
from tokenforge.synth.binding import TokenBinder
from tokenforge.synth.builders import BuildContext, Builder, build_generic, builder_for

if TYPE_CHECKING:
    from tokenforge.host.base import HostPlatform, SceneNode
    from tokenforge.synth.fonts import FontRegistry

logger = logging.getLogger(__name__)


@dataclass
class SynthesisResult:
    """Artifacts created by ``synthesize_all`` and where they were placed."""

    artifacts: list[SceneNode] = field(default_factory=list)
    sections: list[SceneNode] = field(default_factory=list)
    next_y: float = 0
    layout: SectionLayout = field(default_factory=SectionLayout)
    builder_errors: list[str] = field(default_factory=list)


class ComponentSynthesizer:
    """
    Builds components against a populated Symbol Table.

    The synthesizer keeps a name → artifact map so that later components
    (organisms, templates) can place instances of earlier ones.

    ``builders`` adds or replaces builders by component name; names found
    neither there nor in ``BUILDERS`` use the generic builder.
    """

    def __init__(
        self,
        host: HostPlatform,
        symbols: SymbolTable,
        fonts: FontRegistry | None = None,
        events: SynthesisEvents | None = None,
        *,
        variant_cap: int = DEFAULT_VARIANT_CAP,
        policy: TruncationPolicy = TruncationPolicy.TRAVERSAL,
        variant_gap: float = DEFAULT_GAP,
        max_row_width: float = DEFAULT_MAX_ROW_WIDTH,
        padding: float = DEFAULT_PADDING,
        gap: float = DEFAULT_SECTION_ITEM_GAP,
        section_gap: float = DEFAULT_SECTION_GAP,
        builders: Mapping[str, Builder] | None = None,
    ):
        self.host = host
        self.builders = dict(builders or {})
        self.symbols = symbols
        self.events = events or noop()
        self.binder = TokenBinder(host, symbols, fonts)
        self.variant_cap = variant_cap
        self.policy = policy
        self.variant_gap = variant_gap
        self.max_row_width = max_row_width
        self.padding = padding
        self.gap = gap
        self.section_gap = section_gap
        self.refs: dict[str, SceneNode] = {}
        self.builder_errors: list[str] = []

    # --------------------------------------------------------------------- #
    # Single component
    # --------------------------------------------------------------------- #

    def synthesize(self, definition: ComponentDefinition) -> SceneNode:
        """
        Build one definition.

        Without axes this is a single component. With axes, the default
        combination is built first, followed by the rest of the bounded
        variant set; the variants are laid out on a grid and combined into
        a component set. If the host refuses to combine them, the first
        (default) variant is returned on its own.
        """
        if not definition.has_variants:
            return self._build_variant(definition, {})

        combos = variant_set(
            definition.variants, definition.default_variant, self.variant_cap, self.policy
        )
        variants = [self._build_variant(definition, combo) for combo in combos]

        arrange_variant_grid(
            variants,
            definition.variants,
            gap_x=self.variant_gap,
            gap_y=self.variant_gap,
            fallback_size=definition.category.default_size,
        )

        if len(variants) == 1:
            return variants[0]
        try:
            return self.host.combine_as_variants(variants, definition.name)
        except HostError as e:
            logger.debug("Could not combine %s variants: %s", definition.name, e.message)
            return variants[0]

    def _build_variant(
        self, definition: ComponentDefinition, combo: VariantCombination
    ) -> SceneNode:
        name = combination_name(combo) if combo else definition.name
        width, height = definition.category.default_size
        ctx = BuildContext(
            host=self.host,
            binder=self.binder,
            definition=definition,
            combo=dict(combo),
            size=(width, height),
            refs=self.refs,
        )

        builder = self.builders.get(definition.name) or builder_for(definition.name)
        if builder is not None:
            node = self._new_component(name, width, height)
            try:
                builder(node, ctx)
                return node
            except Exception as e:
                message = f"Builder error [{definition.name}]: {e}"
                self.events.log(message, LEVEL_ERROR)
                self.builder_errors.append(message)
                logger.debug("Builder %s failed", definition.name, exc_info=True)

        node = self._new_component(name, width, height)
        build_generic(node, ctx)
        return node

    def _new_component(self, name: str, width: float, height: float) -> SceneNode:
        node = self.host.create_component(name, width, height)
        self.host.set_properties(
            node,
            layoutMode="VERTICAL",
            paddingTop=8,
            paddingBottom=8,
            paddingLeft=12,
            paddingRight=12,
        )
        return node

    # --------------------------------------------------------------------- #
    # Catalog
    # --------------------------------------------------------------------- #

    def synthesize_all(
        self,
        definitions: Sequence[ComponentDefinition],
        categories: Sequence[ComponentCategory] = CATEGORY_ORDER,
        start_y: float = 0,
    ) -> SynthesisResult:
        """
        Build every definition, category by category, and pack the sections.

        Definitions whose category is not in ``categories`` are ignored.
        """
        result = SynthesisResult(next_y=start_y)
        by_category: dict[str, list[SceneNode]] = {}

        for category in categories:
            for definition in definitions:
                if definition.category != category:
                    continue
                artifact = self.synthesize(definition)
                self.refs[definition.name] = artifact
                by_category.setdefault(category.value, []).append(artifact)
                result.artifacts.append(artifact)
                self.events.log(f"Component: {definition.name}", LEVEL_DONE)

        layout = arrange_sections(
            by_category,
            [c.value for c in categories],
            titles={c.value: c.section_title for c in categories},
            max_row_width=self.max_row_width,
            padding=self.padding,
            gap=self.gap,
            section_gap=self.section_gap,
            start_y=start_y,
        )

        for section in layout.sections:
            node = self.host.create_section(section.title)
            for child in section.children:
                self.host.append_child(node, child)
            self.host.resize(node, section.width, section.height)
            node.x = section.x
            node.y = section.y
            self.host.append_to_page(node)
            result.sections.append(node)

        result.layout = layout
        result.next_y = layout.next_y
        result.builder_errors = list(self.builder_errors)
        return result
