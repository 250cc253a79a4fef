"""Concrete directive kinds, looked up by marker kind."""

from __future__ import annotations

from typing import Dict, Type

from ..directive import Directive
from .colony import DirectiveColonize, DirectiveOutpost
from .defense import DirectiveGuard, DirectiveInvasionDefense, DirectiveOutpostDefense
from .resource import DirectiveExtract
from .situational import DirectiveBootstrap, DirectiveNukeResponse
from .terminal import DirectiveTerminalEvacuateState

DIRECTIVE_KINDS: Dict[str, Type[Directive]] = {
    cls.kind: cls
    for cls in (
        DirectiveBootstrap,
        DirectiveColonize,
        DirectiveExtract,
        DirectiveGuard,
        DirectiveInvasionDefense,
        DirectiveNukeResponse,
        DirectiveOutpost,
        DirectiveOutpostDefense,
        DirectiveTerminalEvacuateState,
    )
}

__all__ = [
    "DIRECTIVE_KINDS",
    "DirectiveBootstrap",
    "DirectiveColonize",
    "DirectiveExtract",
    "DirectiveGuard",
    "DirectiveInvasionDefense",
    "DirectiveNukeResponse",
    "DirectiveOutpost",
    "DirectiveOutpostDefense",
    "DirectiveTerminalEvacuateState",
]
