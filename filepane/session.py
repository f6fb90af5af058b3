"""
State shared by every directory controller of one explorer tree.

The session replaces the document-wide "mouse down" hook of a browser
explorer: it owns the tree root, the selection slot, the tab registry and
the single prompt slot (one rename or create at a time across the tree).
"""
from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from filepane.controller import DirectoryController, Editing
from filepane.models import FileNode
from filepane.selection import SelectionBroadcaster, current_selected
from filepane.tabs import CurrentFile, OpenTabs, iter_subtree
from filepane.ui.questionary import confirm_in_terminal

logger = logging.getLogger(__name__)


def _log_warning(message: str) -> None:
    logger.warning(message)


class ExplorerSession:
    def __init__(
        self,
        root: FileNode,
        selection: Optional[SelectionBroadcaster] = None,
        tabs: Optional[OpenTabs] = None,
        current_file: Optional[CurrentFile] = None,
        confirm: Optional[Callable[[str], bool]] = None,
        notify: Optional[Callable[[str], None]] = None,
    ):
        self.root = root
        self.selection = selection if selection is not None else current_selected
        self.tabs = tabs if tabs is not None else OpenTabs()
        self.current_file = current_file if current_file is not None else CurrentFile()
        self.confirm = confirm or confirm_in_terminal
        self.notify = notify or _log_warning
        self._controllers: List[Tuple[FileNode, DirectoryController]] = []
        self._prompt_owner: Optional[DirectoryController] = None

    @property
    def root_controller(self) -> DirectoryController:
        return self.controller_for(self.root)

    @property
    def prompt_owner(self) -> Optional[DirectoryController]:
        return self._prompt_owner

    def controller_for(self, directory: FileNode) -> DirectoryController:
        """Return the controller rendering ``directory``'s children, creating it once."""
        for node, controller in self._controllers:
            if node is directory:
                return controller
        controller = DirectoryController(directory, self, depth=self.depth_of(directory))
        self._controllers.append((directory, controller))
        return controller

    def controller_owning(self, node: FileNode) -> Optional[DirectoryController]:
        """The controller whose children list holds ``node`` (None for the root)."""
        parent = self.find_parent(node)
        if parent is None:
            return None
        return self.controller_for(parent)

    def forget(self, node: FileNode) -> None:
        """Drop the controllers of a removed subtree."""
        removed = list(iter_subtree(node))
        kept = []
        for directory, controller in self._controllers:
            if any(directory is r for r in removed):
                if self._prompt_owner is controller:
                    self._prompt_owner = None
                controller.dispose()
            else:
                kept.append((directory, controller))
        self._controllers = kept

    def find_parent(self, node: FileNode) -> Optional[FileNode]:
        for candidate in iter_subtree(self.root):
            if any(child is node for child in candidate.children or []):
                return candidate
        return None

    def depth_of(self, node: FileNode) -> int:
        depth = 0
        parent = self.find_parent(node)
        while parent is not None:
            depth += 1
            parent = self.find_parent(parent)
        return depth

    def clear_all_edit_flags(self) -> None:
        """Leave edit mode on every node of the tree."""
        for node in iter_subtree(self.root):
            node.edit_mode = False
        owner = self._prompt_owner
        if owner is not None and isinstance(owner.prompt, Editing):
            owner.reset_prompt()
            self._prompt_owner = None

    def begin(self, controller: DirectoryController) -> None:
        """Give ``controller`` the prompt slot, closing whatever held it."""
        self.clear_all_edit_flags()
        previous = self._prompt_owner
        if previous is not None and previous is not controller:
            previous.reset_prompt()
        self._prompt_owner = controller

    def release(self, controller: DirectoryController) -> None:
        if self._prompt_owner is controller:
            self._prompt_owner = None
