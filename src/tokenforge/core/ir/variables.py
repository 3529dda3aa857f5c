"""
Host-side records created during variable synthesis.

Modes and collections mirror what the host platform reports back;
ResolvedVariable is the Symbol Table entry for one created variable.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .tokens import Tier, TokenType


class Mode(BaseModel):
    """A named value-set within a collection."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    collection_id: str


class Collection(BaseModel):
    """
    A named tier of variables with one or more modes.

    The first mode is always present and is the implicit default. Modes
    are appended only by the Collection & Mode Manager.
    """

    id: str
    name: str
    modes: list[Mode] = Field(default_factory=list)

    @property
    def default_mode(self) -> Mode:
        return self.modes[0]

    def mode_named(self, name: str) -> Mode | None:
        for mode in self.modes:
            if mode.name == name:
                return mode
        return None

    def mode_by_id(self, mode_id: str) -> Mode | None:
        for mode in self.modes:
            if mode.id == mode_id:
                return mode
        return None

    @property
    def mode_names(self) -> list[str]:
        return [mode.name for mode in self.modes]


class ResolvedVariable(BaseModel):
    """A created host variable, registered in the Symbol Table."""

    model_config = ConfigDict(frozen=True)

    path: str
    collection_name: str
    collection_id: str
    tier: Tier
    handle: str
    type: TokenType

    @property
    def qualified_path(self) -> str:
        return f"{self.tier.prefix}/{self.path}"
