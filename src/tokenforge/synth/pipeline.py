"""
Synthesis pipeline.

Runs the stages in order against one host:

1. Fonts
2. Variables: Primitives, Semantic (+ theme overrides), Component (+ theme overrides)
3. Text styles, effect styles, color styles
4. Components, then the "Getting Started" section

Every stage reports through a SynthesisEvents stream. An exception that
escapes a stage ends the run with an ``error`` event.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tokenforge.core.ir import StageOptions, Tier, TokenPayload
from tokenforge.core.manifest import ForgeManifest
from tokenforge.core.modes import create_collection
from tokenforge.core.overrides import apply_theme_overrides
from tokenforge.core.payload import bundled_payload
from tokenforge.core.resolver import create_variables
from tokenforge.core.symbols import SymbolTable
from tokenforge.events import LEVEL_DONE, LEVEL_ERROR, LEVEL_INFO, SynthesisEvents
from tokenforge.host.memory import InMemoryHost
from tokenforge.synth.fonts import FontRegistry
from tokenforge.synth.instructions import create_instructions_section
from tokenforge.synth.styles import (
    create_color_styles,
    create_effect_styles,
    create_text_styles,
)
from tokenforge.synth.synthesizer import ComponentSynthesizer

if TYPE_CHECKING:
    from tokenforge.host.base import HostPlatform
    from tokenforge.synth.builders import Builder

logger = logging.getLogger(__name__)

NO_PAYLOAD_MESSAGE = (
    "No token data available. Supply a token payload or install the bundled tokens."
)
INSTRUCTIONS_PROGRESS = 95


@dataclass
class SynthesisStats:
    """Counts reported with the ``done`` event."""

    variables: int = 0
    styles: int = 0
    components: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "variables": self.variables,
            "styles": self.styles,
            "components": self.components,
        }


class _Steps:
    """Progress bookkeeping: one step per collection and per enabled stage."""

    def __init__(self, options: StageOptions):
        total = 0
        if options.variables:
            total += 3
        if options.text_styles:
            total += 1
        if options.effect_styles:
            total += 1
        if options.components:
            total += 1
        self.total = total
        self.current = 0

    @property
    def percent(self) -> float:
        if not self.total:
            return 0
        return self.current / self.total * 100

    def advance(self) -> None:
        self.current += 1


# =============================================================================
# Stages
# =============================================================================


def _create_tiers(
    host: HostPlatform,
    payload: TokenPayload,
    symbols: SymbolTable,
    config: ForgeManifest,
    events: SynthesisEvents,
    steps: _Steps,
) -> int:
    """Create the three collections and apply theme overrides. Returns the variable count."""
    events.progress(steps.percent, "Creating Primitives collection...")
    events.log("Creating variable collections...", LEVEL_INFO)

    primitives = create_collection(host, Tier.PRIMITIVES.collection_name, config.modes.primitives, events)
    report = create_variables(
        host,
        primitives,
        payload.variables.primitives,
        primitives.default_mode.id,
        symbols,
        Tier.PRIMITIVES,
    )
    total = report.count
    events.log(f"  Primitives: {report.count} variables", LEVEL_DONE)
    steps.advance()
    events.progress(steps.percent, "Creating Semantic collection...")

    for tier, next_message in (
        (Tier.SEMANTIC, "Creating Component collection..."),
        (Tier.COMPONENT, "Variables complete"),
    ):
        collection = create_collection(host, tier.collection_name, config.modes.themes, events)
        report = create_variables(
            host,
            collection,
            payload.variables.for_tier(tier),
            collection.default_mode.id,
            symbols,
            tier,
        )
        total += report.count

        events.log(f"  Applying {tier.value} theme overrides...", LEVEL_INFO)
        apply_theme_overrides(
            host,
            collection,
            payload.themes,
            symbols,
            tier.prefix,
            events,
            theme_keys=config.modes.theme_keys,
        )
        events.log(
            f"  {tier.collection_name}: {report.count} variables, {len(collection.modes)} modes",
            LEVEL_DONE,
        )
        steps.advance()
        events.progress(steps.percent, next_message)

    return total


async def run_synthesis(
    payload: TokenPayload | None = None,
    options: StageOptions | None = None,
    host: HostPlatform | None = None,
    events: SynthesisEvents | None = None,
    config: ForgeManifest | None = None,
    *,
    symbols: SymbolTable | None = None,
    builders: Mapping[str, Builder] | None = None,
) -> SynthesisStats | None:
    """
    Run a full synthesis.

    Args:
        payload: Token payload; the bundled payload is used when None
        options: Stages to run; defaults to ``config.stages``
        host: Target host; an InMemoryHost honouring ``config.host`` when None
        events: Event stream; a fresh recording stream when None
        config: Project manifest; defaults everywhere when None
        symbols: Symbol Table to populate (lets callers inspect it afterwards)
        builders: Extra or replacement component builders by name

    Returns:
        SynthesisStats, or None when there was no payload or a stage failed
    """
    config = config or ForgeManifest()
    events = events if events is not None else SynthesisEvents()

    if payload is None:
        payload = bundled_payload()
    if payload is None:
        events.error(NO_PAYLOAD_MESSAGE)
        return None

    options = options or config.stages.to_options()
    host = host if host is not None else InMemoryHost(max_modes=config.host.max_modes)
    symbols = symbols if symbols is not None else SymbolTable()
    steps = _Steps(options)
    stats = SynthesisStats()

    try:
        fonts = FontRegistry()
        await fonts.load(host, events=events)

        if options.variables:
            stats.variables = _create_tiers(host, payload, symbols, config, events, steps)

        if options.text_styles:
            events.progress(steps.percent, "Creating text styles...")
            stats.styles += len(await create_text_styles(host, payload.text_styles, events))
            steps.advance()

        if options.effect_styles:
            events.progress(steps.percent, "Creating effect styles...")
            stats.styles += len(create_effect_styles(host, payload.effect_styles, events))
            steps.advance()

        if payload.color_styles:
            events.progress(steps.percent, "Creating color styles...")
            color_styles = create_color_styles(
                host, payload.color_styles, symbols, events, config.style_namespace
            )
            stats.styles += len(color_styles)
            events.log(f"  Color styles: {len(color_styles)}", LEVEL_DONE)

        if options.components:
            events.progress(steps.percent, "Creating components...")
            synthesizer = ComponentSynthesizer(
                host,
                symbols,
                fonts,
                events,
                variant_cap=config.variants.cap,
                policy=config.variants.policy,
                variant_gap=config.layout.variant_gap,
                max_row_width=config.layout.max_row_width,
                padding=config.layout.padding,
                gap=config.layout.gap,
                section_gap=config.layout.section_gap,
                builders=builders,
            )
            result = synthesizer.synthesize_all(payload.components)
            stats.components = len(result.artifacts)
            steps.advance()

            events.progress(INSTRUCTIONS_PROGRESS, "Creating instructions...")
            create_instructions_section(host, fonts, result.next_y, events)

    except Exception as e:
        logger.debug("Synthesis failed", exc_info=True)
        message = str(e) or type(e).__name__
        events.error(message)
        events.log(f"Error: {message}", LEVEL_ERROR)
        return None

    events.done(stats.to_dict())
    events.log(
        f"\nComplete! {stats.variables} variables, {stats.styles} styles, "
        f"{stats.components} components",
        LEVEL_DONE,
    )
    return stats


def synthesize(
    payload: TokenPayload | None = None,
    options: StageOptions | None = None,
    host: HostPlatform | None = None,
    events: SynthesisEvents | None = None,
    config: ForgeManifest | None = None,
    **kwargs,
) -> SynthesisStats | None:
    """Blocking wrapper around ``run_synthesis``."""
    return asyncio.run(run_synthesis(payload, options, host, events, config, **kwargs))
