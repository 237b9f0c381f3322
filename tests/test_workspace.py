import pytest

from tab_bookmark.host import SCRATCH_BUFFER, Workspace
from tab_bookmark.store import BufferRecord


def make_workspace() -> Workspace:
    workspace = Workspace(file_exists=lambda path: path.startswith("/src/"))
    workspace.add_buffer("a.py", path="/src/a.py", point=10)
    workspace.add_buffer("b.py", path="/src/b.py")
    return workspace


def test_new_workspace_has_one_unnamed_tab() -> None:
    workspace = Workspace()

    assert workspace.current_context() is None
    assert workspace.context_names() == []
    assert [w.buffer for w in workspace.tab.windows] == [SCRATCH_BUFFER]


def test_visible_buffers_deduplicates_windows() -> None:
    workspace = make_workspace()
    workspace.show("a.py", "b.py", "a.py")

    names = [info.name for info in workspace.visible_buffers()]

    assert names == ["a.py", "b.py"]


def test_geometry_round_trip() -> None:
    workspace = make_workspace()
    workspace.show("a.py", "b.py", orientation="vertical")
    geometry = workspace.capture_geometry()
    workspace.show("b.py")

    workspace.apply_geometry(geometry)

    assert [w.buffer for w in workspace.tab.windows] == ["a.py", "b.py"]
    assert workspace.tab.orientation == "vertical"
    assert workspace.tab.windows[0].point == 10


def test_apply_geometry_replaces_unknown_buffers() -> None:
    workspace = make_workspace()

    workspace.apply_geometry(
        {"orientation": "diagonal", "windows": [{"buffer": "gone.py"}], "selected": 4}
    )

    assert [w.buffer for w in workspace.tab.windows] == [SCRATCH_BUFFER]
    assert workspace.tab.orientation == "single"
    assert workspace.tab.selected == 0


def test_open_buffer_requires_existing_file() -> None:
    workspace = make_workspace()

    workspace.open_buffer(BufferRecord("c.py", path="/src/c.py", point=3))
    with pytest.raises(FileNotFoundError):
        workspace.open_buffer(BufferRecord("x.py", path="/elsewhere/x.py"))

    assert workspace.tab.selected_window.buffer == "c.py"
    assert workspace.tab.selected_window.point == 3


def test_open_buffer_without_path() -> None:
    workspace = make_workspace()

    workspace.open_buffer(BufferRecord("*notes*", attributes={"recordable": "true"}))
    with pytest.raises(LookupError):
        workspace.open_buffer(BufferRecord("*shell*"))

    assert workspace.buffers["*notes*"].recordable


def test_record_marks_recordable_buffers() -> None:
    workspace = make_workspace()
    info = workspace.add_buffer("*notes*", recordable=True)

    record = workspace.record(info)

    assert record.path is None
    assert record.attributes == {"recordable": "true"}


def test_tab_switching() -> None:
    workspace = make_workspace()
    workspace.rename_current("C")
    workspace.new_context()
    workspace.rename_current("D")

    workspace.switch_to("C")

    assert workspace.current_context() == "C"
    assert workspace.context_names() == ["C", "D"]
    with pytest.raises(KeyError):
        workspace.switch_to("E")


def test_close_current_tab() -> None:
    workspace = make_workspace()
    workspace.new_context()

    workspace.close_current()

    assert len(workspace.tabs) == 1
    with pytest.raises(RuntimeError):
        workspace.close_current()
