import pytest
from unittest.mock import MagicMock
from filepane.models import FileNode, NodeType
from filepane.selection import SelectionBroadcaster
from filepane.session import ExplorerSession
from filepane.tabs import CurrentFile, OpenTabs


@pytest.fixture
def root():
    """
    .
    ├── dirA/
    │   └── z.txt
    ├── dirB/
    └── y.txt
    """
    z = FileNode(name="z.txt", node_type=NodeType.FILE)
    dir_a = FileNode(name="dirA", node_type=NodeType.DIRECTORY, children=[z])
    dir_b = FileNode(name="dirB", node_type=NodeType.DIRECTORY)
    y = FileNode(name="y.txt", node_type=NodeType.FILE)
    return FileNode(name=".", node_type=NodeType.DIRECTORY, children=[dir_a, dir_b, y], is_open=True)


@pytest.fixture
def nodes(root):
    """Name -> node lookup over the fixture tree (the instances the tree holds)."""
    dir_a, dir_b, y = root.children
    return {"dirA": dir_a, "dirB": dir_b, "y.txt": y, "z.txt": dir_a.children[0]}


@pytest.fixture
def tabs():
    return MagicMock(spec=OpenTabs)


@pytest.fixture
def session(root, tabs):
    return ExplorerSession(
        root,
        selection=SelectionBroadcaster(),
        tabs=tabs,
        current_file=MagicMock(spec=CurrentFile),
        confirm=MagicMock(return_value=True),
        notify=MagicMock(),
    )


@pytest.fixture
def controller(session):
    return session.root_controller
