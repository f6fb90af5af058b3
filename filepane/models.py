"""
where we store the
pydantic Data Structure classes
for the explorer tree and its context menu

"""

from pydantic import BaseModel, ConfigDict, model_validator
from typing import List, Optional, Dict, Any
from enum import Enum


class NodeType(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


class FileNode(BaseModel):
    """
    One entry of the explorer tree.

    Nodes are compared by identity wherever it matters (active node, removal,
    open tabs): two files with the same name in different folders are equal
    as pydantic models but are never the same node.
    """
    model_config = ConfigDict(use_enum_values=True)

    name: str
    node_type: NodeType
    children: Optional[List['FileNode']] = None
    is_open: bool = False
    edit_mode: bool = False
    metadata: Dict[str, Any] = {}

    @model_validator(mode="after")
    def _check_shape(self) -> "FileNode":
        if not self.name:
            raise ValueError("node name must not be empty")
        if self.node_type == NodeType.DIRECTORY:
            if self.children is None:
                self.children = []
        elif self.children is not None:
            raise ValueError(f"file node '{self.name}' cannot have children")
        return self

    @property
    def is_directory(self) -> bool:
        return self.node_type == NodeType.DIRECTORY

    def __repr__(self) -> str:
        return f"FileNode(name={self.name!r}, node_type={self.node_type!r})"


class ContextCommand(str, Enum):
    RENAME = "rename"
    DELETE = "delete"
    NEW_FILE = "new-file"
    NEW_DIR = "new-dir"


class ContextMenuItem(BaseModel):
    text: str
    event: str


class ContextMenuClick(BaseModel):
    """What a context menu emits: the source UI event plus the clicked item."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    event: Any = None
    data: ContextMenuItem
