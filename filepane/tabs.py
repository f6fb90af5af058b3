"""
Default collaborators the explorer reports to: the open-tab registry of the
editor and the "current file" side channel used to load editor content.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from filepane.models import FileNode

logger = logging.getLogger(__name__)


def _contains(nodes: List[FileNode], node: FileNode) -> bool:
    return any(n is node for n in nodes)


def iter_subtree(node: FileNode):
    """Yield ``node`` and all of its descendants, depth first."""
    yield node
    for child in node.children or []:
        yield from iter_subtree(child)


class OpenTabs:
    """
    Tracks which nodes are open in the editor and which tab is active.
    Closing a directory closes the tabs of everything below it.
    """

    def __init__(self):
        self._open: List[FileNode] = []
        self._active: Optional[FileNode] = None

    @property
    def open_tabs(self) -> List[FileNode]:
        return list(self._open)

    @property
    def active(self) -> Optional[FileNode]:
        return self._active

    def is_open(self, node: FileNode) -> bool:
        return _contains(self._open, node)

    def select(self, node: FileNode) -> None:
        if not self.is_open(node):
            self._open.append(node)
            logger.debug("opened tab %s", node.name)
        self._active = node

    def remove(self, node: FileNode) -> None:
        closing = list(iter_subtree(node))
        self._open = [n for n in self._open if not _contains(closing, n)]
        if self._active is not None and _contains(closing, self._active):
            self._active = self._open[-1] if self._open else None
        logger.debug("closed tabs under %s", node.name)


class CurrentFile:
    """Which file the editor shows, and the directory it lives in."""

    def __init__(self):
        self.file: Optional[FileNode] = None
        self.parent: Optional[FileNode] = None

    def select(self, node: FileNode, parent: FileNode) -> None:
        self.file = node
        self.parent = parent
