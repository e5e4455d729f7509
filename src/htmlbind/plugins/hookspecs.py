"""Pluggy hook specifications for htmlbind setup extensions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from htmlbind.binding.leaves import LeafBinder

PROJECT_NAME = "htmlbind"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class HtmlBindHookSpec:
    """Hook specifications for the htmlbind plugin system."""

    @hookspec
    def register_leaf_binders(self) -> dict[type, LeafBinder] | None:
        """Return target type -> LeafBinder mappings for extra leaf kinds."""
