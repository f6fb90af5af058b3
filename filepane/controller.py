"""
Gesture handling for one directory level of the explorer.

A ``DirectoryController`` owns the children list of one directory node and
turns user gestures (click, toggle, rename, delete, context menu commands,
create prompts) into in-place mutations of that list. Subdirectories get
their own controller through :meth:`DirectoryController.child_controller`;
all controllers of a tree share one :class:`~filepane.session.ExplorerSession`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List, Optional, Union

from filepane.context_menu import ContextMenu
from filepane.models import ContextCommand, ContextMenuClick, FileNode, NodeType

if TYPE_CHECKING:
    from filepane.session import ExplorerSession

logger = logging.getLogger(__name__)

ESCAPE = "escape"
ENTER = "enter"

# prompt indentation in terminal cells: one guide per nesting level
BASE_INDENT = 1
INDENT_STEP = 4


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Creating:
    kind: NodeType
    anchor: FileNode
    offset: int = field(default=0, compare=False)


@dataclass(frozen=True)
class Editing:
    node: FileNode


PromptState = Union[Idle, Creating, Editing]
IDLE = Idle()


def _stop(event: Any) -> None:
    if event is not None:
        event.stop()


class DirectoryController:
    def __init__(self, parent_node: FileNode, session: "ExplorerSession", depth: int = 0):
        self.parent_node = parent_node
        self.session = session
        self.depth = depth
        self.active_node: Optional[FileNode] = None
        self.pending_rename: Optional[str] = None
        self.prompt: PromptState = IDLE
        self.context_menu = ContextMenu(self.on_context_menu_click)
        self.subscription = session.selection.subscribe(
            self._on_active_changed,
            lambda err: logger.error("selection update failed: %s", err),
        )

    @property
    def children(self) -> List[FileNode]:
        return self.parent_node.children

    @property
    def indent(self) -> int:
        """Left offset of this level's prompt, in cells."""
        return BASE_INDENT + self.depth * INDENT_STEP

    def child_controller(self, node: FileNode) -> "DirectoryController":
        """Controller for the children of the subdirectory ``node``."""
        return self.session.controller_for(node)

    def dispose(self) -> None:
        self.subscription.unsubscribe()

    def _on_active_changed(self, node: Optional[FileNode]) -> None:
        self.active_node = node

    # --- selection -----------------------------------------------------

    def click(self, node: FileNode, event: Any = None) -> None:
        _stop(event)
        if node.is_directory and self.is_active(node):
            self._toggle_open(node)
        elif not node.is_directory:
            self.session.current_file.select(node, self.parent_node)
            self.session.tabs.select(node)
        self.session.selection.set_active(node)

    def toggle(self, node: FileNode, event: Any = None) -> None:
        _stop(event)
        self._toggle_open(node)

    def is_active(self, node: FileNode) -> bool:
        return self.active_node is node and node is not self.parent_node

    def _toggle_open(self, node: FileNode) -> None:
        if node.is_directory:
            node.is_open = not node.is_open

    # --- inline rename -------------------------------------------------

    def enter_edit(self, node: FileNode, event: Any = None) -> None:
        _stop(event)
        self.session.begin(self)
        self.pending_rename = None
        node.edit_mode = True
        self.prompt = Editing(node)

    def update_rename_buffer(self, text: str) -> None:
        self.pending_rename = text

    def commit_or_cancel_edit(self, key: str, node: FileNode) -> None:
        """Per-keystroke handler of the rename input; only Escape and Enter act."""
        key = key.lower()
        if key == ESCAPE:
            self.pending_rename = None
            node.edit_mode = False
            self._finish_prompt()
        elif key == ENTER:
            name = self.pending_rename or node.name
            if name != node.name and self._name_taken(self.children, name, exclude=node):
                self.session.notify(f"{name} already exists")
                return
            if name != node.name:
                logger.debug("renamed %s -> %s", node.name, name)
            node.name = name
            self.pending_rename = None
            node.edit_mode = False
            self._finish_prompt()

    # --- delete --------------------------------------------------------

    def delete(self, node: FileNode, event: Any = None) -> bool:
        _stop(event)
        if not self.session.confirm(f"Delete {node.name}?"):
            return False
        self._delete_child(node)
        return True

    def _delete_child(self, node: FileNode) -> None:
        self.children[:] = [child for child in self.children if child is not node]
        prompt = self.prompt
        if (isinstance(prompt, Creating) and prompt.anchor is node) or \
                (isinstance(prompt, Editing) and prompt.node is node):
            self._finish_prompt()
        if node.is_directory:
            self.session.forget(node)
        self.session.tabs.remove(node)
        logger.debug("deleted %s from %s", node.name, self.parent_node.name)

    # --- context menu --------------------------------------------------

    def on_context_menu_click(self, click: ContextMenuClick, node: FileNode) -> None:
        self.dispatch_context_command(click.data.event, node)

    def dispatch_context_command(self, command: Union[ContextCommand, str], node: FileNode) -> None:
        try:
            command = ContextCommand(command)
        except ValueError:
            logger.warning("unknown event [%s]", command)
            return
        if command == ContextCommand.RENAME:
            self.enter_edit(node)
        elif command == ContextCommand.DELETE:
            self._delete_child(node)
        elif command == ContextCommand.NEW_FILE:
            self.begin_create(node, NodeType.FILE)
        elif command == ContextCommand.NEW_DIR:
            self.begin_create(node, NodeType.DIRECTORY)

    # --- create prompt -------------------------------------------------

    def begin_create(self, sibling: Optional[FileNode], kind: NodeType = NodeType.FILE) -> None:
        if sibling is None:
            return
        self.session.begin(self)
        self.prompt = Creating(kind=NodeType(kind), anchor=sibling, offset=self.indent)

    def confirm_create(self, name: str) -> bool:
        prompt = self.prompt
        if not isinstance(prompt, Creating):
            return False
        if not name:
            self.session.notify("a name is required")
            return False
        return self.save_create(FileNode(name=name, node_type=prompt.kind))

    def save_create(self, node: FileNode) -> bool:
        """
        Add ``node`` next to the anchor of the open create prompt.

        A file anchor adds to this directory; a directory anchor adds into the
        first child of this directory carrying the anchor's name. A duplicate
        name keeps the prompt open and changes nothing.
        """
        prompt = self.prompt
        if not isinstance(prompt, Creating):
            return False
        target = self._target_children(prompt.anchor)
        if target is None:
            logger.warning("no directory named %s under %s", prompt.anchor.name, self.parent_node.name)
            self._finish_prompt()
            return False
        if any(child.name == node.name for child in target):
            self.session.notify(f"{node.name} already exists")
            return False
        target.append(node)
        logger.debug("created %s %s", node.node_type, node.name)
        self._finish_prompt()
        self.session.selection.set_active(node)
        if not node.is_directory:
            self.session.tabs.select(node)
        return True

    def abort_create(self) -> None:
        if isinstance(self.prompt, Creating):
            self._finish_prompt()

    def _target_children(self, anchor: FileNode) -> Optional[List[FileNode]]:
        if not anchor.is_directory or anchor is self.parent_node:
            return self.children
        for child in self.children:
            if child.name == anchor.name:
                return child.children
        return None

    # --- prompt slot ---------------------------------------------------

    def reset_prompt(self) -> None:
        if isinstance(self.prompt, Editing):
            self.prompt.node.edit_mode = False
            self.pending_rename = None
        self.prompt = IDLE

    def _finish_prompt(self) -> None:
        self.prompt = IDLE
        self.session.release(self)

    @staticmethod
    def _name_taken(nodes: List[FileNode], name: str, exclude: Optional[FileNode] = None) -> bool:
        return any(n.name == name and n is not exclude for n in nodes)
