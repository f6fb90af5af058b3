"""
The explorer's right-click menu: a fixed list of labelled commands.

The menu has no behaviour of its own. A click is packed into a
``ContextMenuClick`` and handed to whoever owns the menu, together with the
node the menu was opened on.
"""
from __future__ import annotations

from typing import Any, Callable, List, Optional

from filepane.models import ContextCommand, ContextMenuClick, ContextMenuItem, FileNode

CONTEXT_MENU_ITEMS: List[ContextMenuItem] = [
    ContextMenuItem(text="delete", event=ContextCommand.DELETE.value),
    ContextMenuItem(text="rename", event=ContextCommand.RENAME.value),
    ContextMenuItem(text="new file", event=ContextCommand.NEW_FILE.value),
    ContextMenuItem(text="new folder", event=ContextCommand.NEW_DIR.value),
]

Handler = Callable[[ContextMenuClick, FileNode], None]


class ContextMenu:
    def __init__(self, handler: Handler, items: Optional[List[ContextMenuItem]] = None):
        self.handler = handler
        self.items = list(items) if items is not None else list(CONTEXT_MENU_ITEMS)

    def click(self, source_event: Any, item: ContextMenuItem, node: FileNode) -> ContextMenuClick:
        click = ContextMenuClick(event=source_event, data=item)
        self.handler(click, node)
        return click

    def for_node(self, node: FileNode) -> Callable[[Any, ContextMenuItem], ContextMenuClick]:
        """Bind the menu to ``node``; the result only needs the event and item."""
        def _click(source_event: Any, item: ContextMenuItem) -> ContextMenuClick:
            return self.click(source_event, item, node)
        return _click
