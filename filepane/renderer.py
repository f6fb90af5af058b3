from typing import List, Optional
from filepane.models import FileNode


class Renderer:
    """
    Renderer turns the explorer tree into plain text:
      - render_tree(): the directory/file hierarchy in ASCII form, showing
        only the contents of open directories unless asked to expand all
    The active node is marked with "*", a node being renamed with "[editing]".
    """
    def __init__(self, root: FileNode, active: Optional[FileNode] = None):
        self.root = root
        self.active = active

    def render_tree(self, expand_all: bool = False) -> str:
        """Return an ASCII tree of the explorer."""
        lines = [self._format_node(self.root)]
        if self.root.children and (expand_all or self.root.is_open):
            lines.extend(self._format_children(self.root.children, prefix="", expand_all=expand_all))
        return "\n".join(lines)

    def _format_node(self, node: FileNode) -> str:
        suffix = "/" if node.is_directory else ""
        marker = " *" if self.active is not None and node is self.active else ""
        editing = " [editing]" if node.edit_mode else ""
        error_indicator = " [Permission Denied]" if node.metadata.get('permission_denied') else ""
        return f"{node.name}{suffix}{marker}{editing}{error_indicator}"

    def _format_children(self, nodes: List[FileNode], prefix: str, expand_all: bool) -> List[str]:
        """Recursively format child nodes with ASCII connectors."""
        formatted = []
        count = len(nodes)
        for index, node in enumerate(nodes):
            is_last = (index == count - 1)
            connector = "└── " if is_last else "├── "
            formatted.append(f"{prefix}{connector}{self._format_node(node)}")

            if node.children and (expand_all or node.is_open):
                next_prefix = prefix + ("    " if is_last else "│   ")
                formatted.extend(self._format_children(node.children, next_prefix, expand_all))
        return formatted
