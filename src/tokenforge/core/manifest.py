import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ErrorContext, ManifestError
from .ir import StageOptions
from .modes import PRIMITIVE_MODES, THEME_KEYS, THEME_MODES
from .variants import DEFAULT_VARIANT_CAP, TruncationPolicy

MANIFEST_FILENAME = "tokenforge.toml"


# =============================================================================
# Stage & Mode Configuration
# =============================================================================


@dataclass
class StagesConfig:
    """Which pipeline stages run by default."""

    variables: bool = True
    text_styles: bool = True
    effect_styles: bool = True
    components: bool = True

    def to_options(self) -> StageOptions:
        return StageOptions(
            variables=self.variables,
            text_styles=self.text_styles,
            effect_styles=self.effect_styles,
            components=self.components,
        )


@dataclass
class ModesConfig:
    """Mode names per collection.

    Examples in tokenforge.toml:

        # Only build three theme modes
        [modes]
        themes = ["Light", "Dark", "Glass"]

        # Map a custom mode name to a theme key in the payload
        [modes.theme_keys]
        "High Contrast" = "highContrast"
    """

    primitives: list[str] = field(default_factory=lambda: list(PRIMITIVE_MODES))
    themes: list[str] = field(default_factory=lambda: list(THEME_MODES))
    theme_keys: dict[str, str] = field(default_factory=lambda: dict(THEME_KEYS))


# =============================================================================
# Layout & Variant Configuration
# =============================================================================


@dataclass
class LayoutConfig:
    """Section and variant-grid spacing."""

    max_row_width: float = 4000
    padding: float = 80
    gap: float = 60
    section_gap: float = 120
    variant_gap: float = 20


@dataclass
class VariantsConfig:
    """Variant explosion cap and truncation policy."""

    cap: int = DEFAULT_VARIANT_CAP
    policy: TruncationPolicy = TruncationPolicy.TRAVERSAL


@dataclass
class HostConfig:
    """Constraints simulated by the in-memory host."""

    max_modes: int | None = None


@dataclass
class ForgeManifest:
    """
    Project manifest loaded from tokenforge.toml.

    Every section is optional; a missing file and an empty file both
    produce the defaults.
    """

    name: str = "tokenforge"
    payload: str | None = None
    style_namespace: str = "Tokenforge"
    stages: StagesConfig = field(default_factory=StagesConfig)
    modes: ModesConfig = field(default_factory=ModesConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    variants: VariantsConfig = field(default_factory=VariantsConfig)
    host: HostConfig = field(default_factory=HostConfig)


def load_manifest(path: Path) -> ForgeManifest:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ManifestError(f"Cannot read manifest: {e}", ErrorContext(file=path)) from e
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Invalid TOML: {e}", ErrorContext(file=path)) from e

    project = data.get("project", {})
    stages_data = data.get("stages", {})
    modes_data = data.get("modes", {})
    layout_data = data.get("layout", {})
    variants_data = data.get("variants", {})
    host_data = data.get("host", {})

    stages_config = StagesConfig(
        variables=stages_data.get("variables", True),
        text_styles=stages_data.get("text_styles", True),
        effect_styles=stages_data.get("effect_styles", True),
        components=stages_data.get("components", True),
    )

    themes = modes_data.get("themes", list(THEME_MODES))
    if not themes:
        raise ManifestError("[modes] themes must name at least one mode", ErrorContext(file=path))
    modes_config = ModesConfig(
        primitives=modes_data.get("primitives", list(PRIMITIVE_MODES)),
        themes=themes,
        theme_keys={**THEME_KEYS, **modes_data.get("theme_keys", {})},
    )

    layout_config = LayoutConfig(
        max_row_width=layout_data.get("max_row_width", 4000),
        padding=layout_data.get("padding", 80),
        gap=layout_data.get("gap", 60),
        section_gap=layout_data.get("section_gap", 120),
        variant_gap=layout_data.get("variant_gap", 20),
    )

    policy_name = variants_data.get("policy", TruncationPolicy.TRAVERSAL.value)
    try:
        policy = TruncationPolicy(policy_name)
    except ValueError:
        choices = ", ".join(p.value for p in TruncationPolicy)
        raise ManifestError(
            f"Unknown variant policy '{policy_name}' (expected one of: {choices})",
            ErrorContext(file=path, pointer="variants.policy"),
        ) from None
    variants_config = VariantsConfig(
        cap=variants_data.get("cap", DEFAULT_VARIANT_CAP),
        policy=policy,
    )

    host_config = HostConfig(max_modes=host_data.get("max_modes"))

    return ForgeManifest(
        name=project.get("name", "tokenforge"),
        payload=project.get("payload"),
        style_namespace=project.get("style_namespace", "Tokenforge"),
        stages=stages_config,
        modes=modes_config,
        layout=layout_config,
        variants=variants_config,
        host=host_config,
    )


def find_manifest(start: Path) -> Path | None:
    """Return ``start/tokenforge.toml`` if it exists. Parent directories are not searched."""
    candidate = start / MANIFEST_FILENAME
    return candidate if candidate.is_file() else None
