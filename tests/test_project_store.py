"""Tests for project sessions and last-change tracking."""

import pytest

from models.diff import DiffKind
from models.project import ProjectFile
from services.project_store import ProjectStore


@pytest.fixture
def session(sample_project):
    return ProjectStore().create(sample_project, "tars", "en")


class TestApplyEdits:
    """Tests for ProjectSession.apply_edits."""

    def test_modified_file_becomes_last_change(self, session):
        old = session.find_file("pubspec.yaml").content
        changed = session.apply_edits(
            [ProjectFile(path="pubspec.yaml", content="name: todo_flow\nversion: 1.1.0", explanation="")]
        )

        assert changed == ["pubspec.yaml"]
        assert session.last_change.path == "pubspec.yaml"
        assert session.last_change.old_content == old
        assert session.find_file("pubspec.yaml").content.endswith("1.1.0")

    def test_explanation_kept_when_edit_has_none(self, session):
        session.apply_edits([ProjectFile(path="pubspec.yaml", content="name: x", explanation="")])
        assert session.find_file("pubspec.yaml").explanation == "Package manifest"

        session.apply_edits([ProjectFile(path="pubspec.yaml", content="name: y", explanation="Renamed")])
        assert session.find_file("pubspec.yaml").explanation == "Renamed"

    def test_new_file_is_appended_with_empty_old_content(self, session):
        changed = session.apply_edits(
            [ProjectFile(path="lib/models/task.dart", content="class Task {}", explanation="Task model")]
        )

        assert changed == ["lib/models/task.dart"]
        assert session.project.files[-1].path == "lib/models/task.dart"
        assert session.last_change.old_content == ""

    def test_unchanged_edit_is_skipped(self, session):
        session.apply_edits([ProjectFile(path="pubspec.yaml", content="name: x")])
        content = session.find_file("lib/main.dart").content

        changed = session.apply_edits([ProjectFile(path="lib/main.dart", content=content)])

        assert changed == []
        assert session.last_change.path == "pubspec.yaml"

    def test_last_applied_edit_wins(self, session):
        changed = session.apply_edits(
            [
                ProjectFile(path="lib/main.dart", content="void main() {}"),
                ProjectFile(path="lib/screens/home.dart", content="class HomeScreen { }"),
            ]
        )
        assert changed == ["lib/main.dart", "lib/screens/home.dart"]
        assert session.last_change.path == "lib/screens/home.dart"


class TestFileView:
    """Tests for ProjectSession.file_view."""

    def test_no_diff_before_any_change(self, session):
        view = session.file_view("lib/main.dart")
        assert view.file.path == "lib/main.dart"
        assert view.is_last_changed is False
        assert view.diff is None

    def test_diff_only_for_last_changed_file(self, session):
        session.apply_edits([ProjectFile(path="pubspec.yaml", content="name: todo_flow\nversion: 2.0.0")])

        view = session.file_view("pubspec.yaml")
        assert view.is_last_changed is True
        assert [(line.kind, line.content) for line in view.diff] == [
            (DiffKind.COMMON, "name: todo_flow"),
            (DiffKind.REMOVED, "version: 1.0.0"),
            (DiffKind.ADDED, "version: 2.0.0"),
        ]

        assert session.file_view("lib/main.dart").diff is None

    def test_unknown_file(self, session):
        with pytest.raises(FileNotFoundError):
            session.file_view("lib/missing.dart")


class TestProjectStore:
    """Tests for the in-memory store."""

    def test_create_get_delete(self, sample_project):
        store = ProjectStore()
        session = store.create(sample_project, "fun-dev", "pt-br")

        assert store.get(session.id) is session
        assert len(store) == 1

        store.delete(session.id)
        assert len(store) == 0
        with pytest.raises(KeyError):
            store.get(session.id)

    def test_unknown_id(self):
        with pytest.raises(KeyError):
            ProjectStore().delete("nope")

    def test_history_turns(self, session):
        session.add_turn("user", "Add dark mode")
        session.add_turn("assistant", "Done")
        assert session.history == [
            {"role": "user", "content": "Add dark mode"},
            {"role": "assistant", "content": "Done"},
        ]
