"""Shared pytest fixtures for tokenforge tests."""

import json
from pathlib import Path

import pytest

from tokenforge.core.ir import (
    Collection,
    ComponentDefinition,
    Mode,
    ResolvedVariable,
    Tier,
    TokenPayload,
    TokenType,
)
from tokenforge.core.payload import parse_payload
from tokenforge.core.symbols import SymbolTable
from tokenforge.events import SynthesisEvents
from tokenforge.host.memory import InMemoryHost


@pytest.fixture
def host() -> InMemoryHost:
    """Return a fresh in-memory host with no simulated limits."""
    return InMemoryHost()


@pytest.fixture
def symbols() -> SymbolTable:
    return SymbolTable()


@pytest.fixture
def events() -> SynthesisEvents:
    return SynthesisEvents()


@pytest.fixture
def semantic_collection() -> Collection:
    """A Semantic collection with Light (default) and Dark modes."""
    return Collection(
        id="c-sem",
        name="Semantic",
        modes=[
            Mode(id="m-light", name="Light", collection_id="c-sem"),
            Mode(id="m-dark", name="Dark", collection_id="c-sem"),
        ],
    )


def make_variable(
    path: str,
    tier: Tier = Tier.SEMANTIC,
    handle: str | None = None,
    token_type: TokenType = TokenType.COLOR,
    collection_id: str = "c-sem",
) -> ResolvedVariable:
    """Build a ResolvedVariable without going through a host."""
    return ResolvedVariable(
        path=path,
        collection_name=tier.collection_name,
        collection_id=collection_id,
        tier=tier,
        handle=handle or f"h-{tier.value}-{path}",
        type=token_type,
    )


@pytest.fixture
def make_var():
    """Factory fixture for ResolvedVariable instances."""
    return make_variable


SMALL_PAYLOAD = {
    "variables": {
        "primitives": {
            "color/blue/600": {"type": "color", "value": "#2563eb"},
            "color/gray/900": {"type": "color", "value": "#111827"},
            "radius/md": {"type": "dimension", "value": 6},
        },
        "semantic": {
            "color/primary/default": {"type": "color", "alias": "primitives/color/blue/600"},
            "text/default": {"type": "color", "alias": "primitives/color/gray/900"},
            "radius/control": {"type": "dimension", "alias": "primitives/radius/md"},
        },
        "component": {
            "button/primary/bg": {"type": "color", "alias": "semantic/color/primary/default"},
            "button/radius": {"type": "dimension", "alias": "semantic/radius/control"},
        },
    },
    "themes": {
        "dark": {
            "label": "Dark",
            "overrides": {
                "semantic/color/primary/default": {"type": "color", "value": "#60a5fa"},
            },
        },
    },
    "textStyles": [
        {"name": "Body/Default", "fontFamily": "Inter", "fontSize": 16, "fontWeight": 400},
    ],
    "effectStyles": [
        {
            "name": "Shadow/sm",
            "effects": [
                {
                    "type": "DROP_SHADOW",
                    "color": {"r": 0, "g": 0, "b": 0, "a": 0.05},
                    "offset": {"x": 0, "y": 1},
                    "radius": 2,
                }
            ],
        },
    ],
    "colorStyles": [
        {
            "name": "Primary",
            "variablePath": "color/primary/default",
            "fallback": {"r": 0.1, "g": 0.4, "b": 0.9, "a": 1},
        },
    ],
    "components": [
        {
            "name": "Button",
            "category": "atom",
            "variants": {"Size": ["sm", "md", "lg"], "State": ["default", "disabled"]},
            "defaultVariant": {"Size": "md", "State": "default"},
            "tokens": {"fill": "component/button/primary/bg", "radius": "component/button/radius"},
        },
        {
            "name": "Card",
            "category": "organism",
            "tokens": {"fill": "semantic/color/primary/default"},
        },
    ],
}


@pytest.fixture
def payload_data() -> dict:
    """Raw (camelCase) payload data; a deep copy per test."""
    return json.loads(json.dumps(SMALL_PAYLOAD))


@pytest.fixture
def payload(payload_data: dict) -> TokenPayload:
    return parse_payload(payload_data)


@pytest.fixture
def payload_file(tmp_path: Path, payload_data: dict) -> Path:
    path = tmp_path / "tokens.json"
    path.write_text(json.dumps(payload_data), encoding="utf-8")
    return path


@pytest.fixture
def button_definition() -> ComponentDefinition:
    return ComponentDefinition(
        name="Button",
        variants={"Size": ["sm", "md", "lg"], "State": ["default", "disabled"]},
        default_variant={"Size": "md", "State": "default"},
        tokens={"fill": "component/button/{Variant}/bg"},
    )


@pytest.fixture
def tokens_dir(tmp_path: Path) -> Path:
    """A small DTCG token directory."""
    root = tmp_path / "tokens"
    for sub in ("primitives", "semantic", "components", "themes"):
        (root / sub).mkdir(parents=True)

    (root / "primitives" / "colors.json").write_text(
        json.dumps(
            {
                "primitive": {
                    "color": {
                        "$type": "color",
                        "blue": {"600": {"$value": "#2563eb"}, "400": {"$value": "#60a5fa"}},
                        "gray": {"900": {"$value": "#111827"}},
                    },
                    "radius": {"$type": "dimension", "md": {"$value": "6px"}},
                    "shadow": {"$type": "shadow", "sm": {"$value": "0 1px 2px #0000000d"}},
                }
            }
        )
    )
    (root / "semantic" / "color.json").write_text(
        json.dumps(
            {
                "semantic": {
                    "color": {
                        "$type": "color",
                        "primary": {"default": {"$value": "{primitive.color.blue.600}"}},
                    },
                    "radius": {"control": {"$type": "dimension", "$value": "0.5rem"}},
                }
            }
        )
    )
    (root / "components" / "button.json").write_text(
        json.dumps(
            {
                "component": {
                    "button": {
                        "primary": {
                            "bg": {"$type": "color", "$value": "{semantic.color.primary.default}"}
                        }
                    }
                }
            }
        )
    )
    (root / "themes" / "glass.json").write_text(
        json.dumps(
            {
                "label": "Glass",
                "description": "Translucent surfaces",
                "overrides": {
                    "semantic.color.primary.default": "rgba(255, 255, 255, 0.6)",
                    "semantic.radius.control": "16px",
                    "semantic.surface.gradient": "linear-gradient(#fff, #000)",
                    "primitive.color.blue.600": "#000000",
                },
            }
        )
    )
    return root
