"""
tokenforge synthesis.

Key components:
- Token binding for component properties (binding.py)
- Component builders (builders.py)
- Component Synthesizer (synthesizer.py)
- Text, effect and color styles (styles.py)
- Full pipeline with progress events (pipeline.py)
"""

from tokenforge.synth.binding import PropertyBinding, TokenBinder
from tokenforge.synth.builders import BUILDERS, BuildContext, builder_for
from tokenforge.synth.fonts import FontRegistry
from tokenforge.synth.pipeline import SynthesisStats, run_synthesis, synthesize
from tokenforge.synth.synthesizer import ComponentSynthesizer, SynthesisResult

__all__ = [
    "BUILDERS",
    "BuildContext",
    "ComponentSynthesizer",
    "FontRegistry",
    "PropertyBinding",
    "SynthesisResult",
    "SynthesisStats",
    "TokenBinder",
    "builder_for",
    "run_synthesis",
    "synthesize",
]
