from typing import Dict, List, Optional
from filepane.controller import Creating, DirectoryController, Editing
from filepane.context_menu import CONTEXT_MENU_ITEMS
from filepane.models import ContextCommand, ContextMenuItem, FileNode, NodeType
from filepane.session import ExplorerSession
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.screen import ModalScreen
from textual.widgets import Button, Footer, Header, Input, Label, OptionList, Tree
from textual.widgets.tree import TreeNode
from textual import events
from rich.text import Text


def _decline(message: str) -> bool:
    # deletes in the TUI are confirmed by ConfirmScreen before they reach a controller
    return False


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no question; dismisses with the answer."""
    BINDINGS = [
        ("y", "dismiss(True)", "Yes"),
        ("n,escape", "dismiss(False)", "No"),
    ]

    def __init__(self, message: str, **kwargs):
        super().__init__(**kwargs)
        self.message = message

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-dialog"):
            yield Label(self.message)
            with Horizontal():
                yield Button("Yes", id="yes", variant="error")
                yield Button("No", id="no", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "yes")


class ContextMenuScreen(ModalScreen[Optional[ContextMenuItem]]):
    """Pop-up list of menu entries; dismisses with the chosen item or None."""
    BINDINGS = [("escape", "dismiss(None)", "Close")]

    def __init__(self, items: List[ContextMenuItem], **kwargs):
        super().__init__(**kwargs)
        self.items = items

    def compose(self) -> ComposeResult:
        yield OptionList(*[item.text for item in self.items], id="context-menu")

    def on_mount(self) -> None:
        self.query_one(OptionList).focus()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.dismiss(self.items[event.option_index])


class PromptInput(Input):
    """The inline rename/create input. Escape cancels."""

    class Cancelled(Message):
        """Sent when the user presses escape in the prompt."""

    def on_key(self, event: events.Key) -> None:
        if event.key == "escape":
            self.post_message(self.Cancelled())
            event.stop()

    def on_mouse_down(self, event: events.MouseDown) -> None:
        # clicks inside the prompt never close it
        event.stop()


class ExplorerApp(App):  # pylint: disable=too-many-public-methods
    CSS = """
    #explorer-tree {
        height: 1fr;
        border: solid gray;
        padding: 0 1;
    }
    #explorer-tree .tree--cursor {
        background: blue;
        color: white;
    }
    #prompt-input {
        dock: bottom;
        display: none;
    }
    #prompt-input.visible {
        display: block;
    }
    #confirm-dialog {
        width: 50;
        height: auto;
        border: thick $error;
        padding: 1 2;
    }
    Button {
        margin: 1 2;
    }
    """

    BINDINGS = [
        ("r,f2", "rename", "Rename"),
        ("n", "new_file", "New file"),
        Binding("N,shift+n", "new_dir", "New folder"),
        ("d,delete", "delete", "Delete"),
        ("m", "menu", "Menu"),
        ("q", "quit", "Quit"),
    ]

    def __init__(self, root: FileNode, session: Optional[ExplorerSession] = None, **kwargs):
        super().__init__(**kwargs)
        self.root_node = root
        self.session = session or ExplorerSession(root, notify=self._warn, confirm=_decline)
        self._tree_nodes: Dict[int, TreeNode] = {}
        self._shown_prompt: Optional[object] = None
        self._explorer_tree: Optional[Tree] = None
        self._prompt_widget: Optional[PromptInput] = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield Tree(self._format_label(self.root_node), data=self.root_node, id="explorer-tree")
        yield PromptInput(id="prompt-input")
        yield Footer()

    async def on_mount(self) -> None:
        tree = self._explorer_tree = self.query_one(Tree)
        self._prompt_widget = self.query_one(PromptInput)
        tree.auto_expand = False
        self._rebuild()
        tree.focus()

    def on_unmount(self) -> None:
        # the selection slot may be process-wide: release every controller of this tree
        self.session.forget(self.root_node)

    # --- model <-> view -------------------------------------------------

    def _warn(self, message: str) -> None:
        self.notify(message, severity="warning")

    def _format_label(self, node: FileNode, active: bool = False) -> Text:
        label = f"{node.name}/" if node.is_directory else node.name
        if node.edit_mode:
            return Text(f"{label} (editing)", style="italic yellow")
        if active:
            return Text(label, style="bold green")
        return Text(label)

    def _rebuild(self) -> None:
        """Redraw the whole tree from the model, keeping the cursor on the active node."""
        tree = self._explorer_tree
        tree.clear()
        tree.root.set_label(self._format_label(self.root_node))
        tree.root.expand()
        self._tree_nodes = {id(self.root_node): tree.root}
        self._add_children(tree.root, self.session.root_controller)
        active = self.session.selection.current
        target = self._tree_nodes.get(id(active)) if active is not None else None
        if target is not None:
            self.call_after_refresh(tree.move_cursor, target)

    def _add_children(self, tree_node: TreeNode, controller: DirectoryController) -> None:
        for child in controller.children:
            label = self._format_label(child, controller.is_active(child))
            if child.is_directory:
                added = tree_node.add(label, data=child, expand=child.is_open, allow_expand=True)
                self._add_children(added, controller.child_controller(child))
            else:
                added = tree_node.add_leaf(label, data=child)
            self._tree_nodes[id(child)] = added

    def _cursor_file_node(self) -> Optional[FileNode]:
        node = self._explorer_tree.cursor_node
        if node is None:
            return None
        return node.data

    def _owner(self, node: FileNode) -> DirectoryController:
        return self.session.controller_owning(node) or self.session.root_controller

    def _sync_prompt(self) -> None:
        """Show the prompt input while some controller is renaming or creating."""
        prompt_input = self._prompt_widget
        owner = self.session.prompt_owner
        state = owner.prompt if owner is not None else None
        if state is not None and state is self._shown_prompt:
            # same prompt still open (e.g. a rejected name): keep what was typed
            return
        self._shown_prompt = state
        if isinstance(state, Editing):
            prompt_input.placeholder = f"rename {state.node.name}"
            prompt_input.value = state.node.name
            prompt_input.styles.margin = (0, 0, 0, owner.indent)
        elif isinstance(state, Creating):
            kind = "folder" if state.kind == NodeType.DIRECTORY else "file"
            prompt_input.placeholder = f"new {kind} name"
            prompt_input.value = ""
            prompt_input.styles.margin = (0, 0, 0, state.offset)
        else:
            prompt_input.remove_class("visible")
            self._explorer_tree.focus()
            return
        prompt_input.add_class("visible")
        prompt_input.focus()

    def _after_gesture(self) -> None:
        self._rebuild()
        self._sync_prompt()

    # --- tree events ----------------------------------------------------

    def on_tree_node_selected(self, event: Tree.NodeSelected) -> None:
        node: FileNode = event.node.data
        if node is None:
            return
        self._owner(node).click(node, event)
        self._rebuild()

    def on_tree_node_expanded(self, event: Tree.NodeExpanded) -> None:
        node: FileNode = event.node.data
        if node is not None and node is not self.root_node and not node.is_open:
            self._owner(node).toggle(node, event)

    def on_tree_node_collapsed(self, event: Tree.NodeCollapsed) -> None:
        node: FileNode = event.node.data
        if node is not None and node is not self.root_node and node.is_open:
            self._owner(node).toggle(node, event)

    def on_mouse_down(self, event: events.MouseDown) -> None:
        owner = self.session.prompt_owner
        if owner is not None and isinstance(owner.prompt, Editing):
            self.session.clear_all_edit_flags()
            self._after_gesture()

    # --- prompt events --------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        owner = self.session.prompt_owner
        if owner is not None and isinstance(owner.prompt, Editing):
            owner.update_rename_buffer(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        owner = self.session.prompt_owner
        if owner is None:
            return
        state = owner.prompt
        if isinstance(state, Editing):
            owner.commit_or_cancel_edit("Enter", state.node)
        elif isinstance(state, Creating):
            if not owner.confirm_create(event.value):
                # keep the prompt open for a corrected name
                return
        self._after_gesture()

    def on_prompt_input_cancelled(self, event: PromptInput.Cancelled) -> None:
        owner = self.session.prompt_owner
        if owner is None:
            return
        state = owner.prompt
        if isinstance(state, Editing):
            owner.commit_or_cancel_edit("Escape", state.node)
        else:
            owner.abort_create()
        self._after_gesture()

    # --- actions --------------------------------------------------------

    async def action_rename(self) -> None:
        node = self._cursor_file_node()
        if node is None or node is self.root_node:
            return
        self._owner(node).enter_edit(node)
        self._after_gesture()

    async def action_new_file(self) -> None:
        self._begin_create(NodeType.FILE)

    async def action_new_dir(self) -> None:
        self._begin_create(NodeType.DIRECTORY)

    def _begin_create(self, kind: NodeType) -> None:
        node = self._cursor_file_node()
        if node is None:
            return
        self._owner(node).begin_create(node, kind)
        self._after_gesture()

    async def action_delete(self) -> None:
        node = self._cursor_file_node()
        if node is None or node is self.root_node:
            return
        owner = self._owner(node)

        def _answered(confirmed: Optional[bool]) -> None:
            if confirmed:
                owner.dispatch_context_command(ContextCommand.DELETE, node)
                self._after_gesture()

        self.push_screen(ConfirmScreen(f"Delete {node.name}?"), _answered)

    async def action_menu(self) -> None:
        node = self._cursor_file_node()
        if node is None or node is self.root_node:
            return
        menu = self._owner(node).context_menu
        click = menu.for_node(node)

        def _chosen(item: Optional[ContextMenuItem]) -> None:
            if item is not None:
                click(None, item)
                self._after_gesture()

        self.push_screen(ContextMenuScreen(menu.items or CONTEXT_MENU_ITEMS), _chosen)

    async def action_quit(self) -> None:
        self.exit()
