from abc import ABC, abstractmethod
from typing import List, Optional
from filepane.models import FileNode, NodeType
import logging
import os
import pathspec

logger = logging.getLogger(__name__)

# Patterns that are never shown in the explorer
HARDCODED = [".git", "__pycache__", "*.egg-info"]


class TreeLoader(ABC):
    """
    Abstract base class for building the explorer's initial tree.
    Concrete strategies implement `load` and return the root FileNode.
    """
    @abstractmethod
    def load(self, root_path: str) -> FileNode:
        """
        Given a root path, return a directory FileNode holding everything under it.
        """


class DirectoryLoader(TreeLoader):
    """
    Default loader that recursively reads a directory from disk.
    Can ignore hidden files, and optionally respect .gitignore patterns.
    """
    def __init__(self, ignore_hidden: bool = True, respect_gitignore: bool = False):
        self.ignore_hidden = ignore_hidden
        self.respect_gitignore = respect_gitignore
        self._hardcoded = pathspec.PathSpec.from_lines("gitwildmatch", HARDCODED)
        self._gitignore_spec: Optional[pathspec.PathSpec] = None

    def load(self, root_path: str) -> FileNode:
        if self.respect_gitignore:
            self._load_gitignore(root_path)
        root = self._walk(root_path, root_path)
        # the root is always shown expanded
        root.is_open = True
        return root

    def _walk(self, path: str, root_path: str) -> FileNode:
        # Use "." for the root node name to match standard tree output
        if path == root_path:
            name = "."
        else:
            name = os.path.basename(path) or path

        if not os.path.isdir(path):
            return FileNode(name=name, node_type=NodeType.FILE)

        node = FileNode(name=name, node_type=NodeType.DIRECTORY)
        try:
            entries = os.listdir(path)
        except PermissionError:
            logger.warning("permission denied: %s", path)
            node.metadata = {"permission_denied": True}
            return node

        children: List[FileNode] = []
        for entry in entries:
            if self._should_skip(entry, root_path, parent_path=path):
                continue
            children.append(self._walk(os.path.join(path, entry), root_path))
        # directories first, then files, each alphabetically
        children.sort(key=lambda child: (not child.is_directory, child.name))
        node.children = children
        return node

    def _should_skip(self, name: str, root_path: str, parent_path: Optional[str] = None) -> bool:
        # compute relative path from root for matching
        rel_dir = os.path.relpath(parent_path, root_path) if parent_path else "."
        rel_path = name if rel_dir == "." else os.path.join(rel_dir, name)
        if os.path.isdir(os.path.join(parent_path or root_path, name)):
            rel_path += "/"

        if self._hardcoded.match_file(rel_path):
            return True

        # Hidden files
        if self.ignore_hidden and name.startswith('.'):
            return True

        # Gitignore
        if self.respect_gitignore and self._gitignore_spec is not None:
            if self._gitignore_spec.match_file(rel_path):
                return True
        return False

    def _load_gitignore(self, root_path: str):
        gitignore_file = os.path.join(root_path, '.gitignore')
        if os.path.isfile(gitignore_file):
            with open(gitignore_file, 'r', encoding='utf-8') as f:
                lines = [line.strip() for line in f if line.strip() and not line.strip().startswith('#')]
            self._gitignore_spec = pathspec.PathSpec.from_lines('gitwildmatch', lines)
        else:
            self._gitignore_spec = None
