from filepane.models import FileNode, NodeType
from filepane.tabs import CurrentFile, OpenTabs, iter_subtree


def test_select_opens_once_and_activates(nodes):
    tabs = OpenTabs()
    tabs.select(nodes["y.txt"])
    tabs.select(nodes["z.txt"])
    tabs.select(nodes["y.txt"])

    assert [n.name for n in tabs.open_tabs] == ["y.txt", "z.txt"]
    assert tabs.active is nodes["y.txt"]


def test_remove_active_falls_back_to_last_open(nodes):
    tabs = OpenTabs()
    tabs.select(nodes["y.txt"])
    tabs.select(nodes["z.txt"])
    tabs.remove(nodes["z.txt"])

    assert tabs.active is nodes["y.txt"]
    tabs.remove(nodes["y.txt"])
    assert tabs.active is None
    assert tabs.open_tabs == []


def test_remove_directory_closes_descendants(nodes):
    tabs = OpenTabs()
    tabs.select(nodes["z.txt"])
    tabs.remove(nodes["dirA"])
    assert not tabs.is_open(nodes["z.txt"])


def test_remove_unknown_node_is_harmless(nodes):
    tabs = OpenTabs()
    tabs.select(nodes["y.txt"])
    tabs.remove(FileNode(name="y.txt", node_type=NodeType.FILE))
    assert tabs.is_open(nodes["y.txt"])


def test_current_file_records_parent(nodes):
    current = CurrentFile()
    current.select(nodes["z.txt"], nodes["dirA"])
    assert current.file is nodes["z.txt"]
    assert current.parent is nodes["dirA"]


def test_iter_subtree_depth_first(root):
    assert [n.name for n in iter_subtree(root)] == [".", "dirA", "z.txt", "dirB", "y.txt"]
