"""
Host platforms.

The engine talks to the design tool only through ``HostPlatform``.
``InMemoryHost`` records the scene graph instead of rendering it.
"""

from tokenforge.host.base import HostPlatform, SceneNode, VariableAlias
from tokenforge.host.memory import InMemoryHost

__all__ = [
    "HostPlatform",
    "InMemoryHost",
    "SceneNode",
    "VariableAlias",
]
