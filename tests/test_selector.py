"""Tests for the selector."""

import os
from unittest.mock import MagicMock

import pytest

from winpefix.core import LogSink, Selector, StateController, WorkList, normalize_selection
from winpefix.picker import ArgumentPicker


class TestNormalizeSelection:
    """Tests for normalize_selection."""

    def test_absolute_paths_unchanged(self):
        """Test absolute entries are kept as given."""
        assert normalize_selection(["/tmp/a.exe"], "/elsewhere") == ["/tmp/a.exe"]

    def test_relative_paths_joined_with_base(self):
        """Test relative entries are combined with the base directory."""
        paths = normalize_selection(["a.exe", "sub/b.exe"], "/data")
        assert paths == ["/data/a.exe", "/data/sub/b.exe"]

    def test_relative_paths_default_to_cwd(self, tmp_path, monkeypatch):
        """Test the current directory is used when there is no base."""
        monkeypatch.chdir(tmp_path)
        assert normalize_selection(["a.exe"]) == [os.path.join(os.getcwd(), "a.exe")]

    def test_paths_are_normalized(self):
        """Test redundant separators and dot segments are removed."""
        assert normalize_selection(["/tmp/./x/../a.exe"]) == ["/tmp/a.exe"]

    def test_duplicates_kept_once_in_presented_order(self):
        """Test repeated entries are collapsed without reordering."""
        paths = normalize_selection(["/tmp/b.exe", "/tmp/a.exe", "/tmp/b.exe"])
        assert paths == ["/tmp/b.exe", "/tmp/a.exe"]

    def test_bytes_entries_decoded(self):
        """Test byte entries are decoded like file system names."""
        assert normalize_selection([b"/tmp/a.exe"]) == ["/tmp/a.exe"]

    def test_blank_entries_dropped(self):
        """Test blank entries are ignored."""
        assert normalize_selection(["", "  ", "/tmp/a.exe"]) == ["/tmp/a.exe"]

    def test_home_expanded(self):
        """Test a leading tilde is expanded."""
        assert normalize_selection(["~/a.exe"]) == [os.path.expanduser("~/a.exe")]


class TestSelector:
    """Tests for Selector."""

    @pytest.fixture
    def work_list(self):
        return WorkList()

    @pytest.fixture
    def log_sink(self):
        return LogSink()

    @pytest.fixture
    def on_change(self):
        return MagicMock()

    @pytest.fixture
    def controller(self, work_list, on_change):
        return StateController(work_list, on_change)

    def make_selector(self, picker, work_list, log_sink, controller):
        return Selector(picker, work_list, log_sink, controller)

    def test_select_merges_and_logs(self, work_list, log_sink, controller, on_change):
        """Test a selection is merged, logged and enables processing."""
        picker = ArgumentPicker(["/tmp/a.exe", "/tmp/b.exe", "/tmp/a.exe"])
        selector = self.make_selector(picker, work_list, log_sink, controller)

        selected = selector.select()

        assert selected == ["/tmp/a.exe", "/tmp/b.exe"]
        assert work_list.paths == ("/tmp/a.exe", "/tmp/b.exe")
        assert log_sink.lines == ("Selected files:", " - /tmp/a.exe", " - /tmp/b.exe")
        assert controller.is_processing_enabled()
        on_change.assert_called_once_with(True)

    def test_log_lists_only_new_selection(self, work_list, log_sink, controller):
        """Test the log shows what was just selected, not the whole list."""
        work_list.merge(["/tmp/a.exe"])
        picker = ArgumentPicker(["/tmp/c.exe", "/tmp/b.exe"])
        selector = self.make_selector(picker, work_list, log_sink, controller)

        selector.select()

        assert log_sink.lines == ("Selected files:", " - /tmp/c.exe", " - /tmp/b.exe")
        assert work_list.paths == ("/tmp/a.exe", "/tmp/b.exe", "/tmp/c.exe")

    def test_reselecting_pending_path(self, work_list, log_sink, controller):
        """Test selecting a pending path again keeps one entry."""
        picker = MagicMock()
        picker.base_directory = None
        picker.pick.side_effect = [["/tmp/a.exe"], ["/tmp/a.exe"]]
        selector = self.make_selector(picker, work_list, log_sink, controller)

        selector.select()
        selector.select()

        assert work_list.paths == ("/tmp/a.exe",)
        assert log_sink.lines.count(" - /tmp/a.exe") == 2

    def test_cancelled_selection_is_noop(self, work_list, log_sink, controller, on_change):
        """Test an empty pick changes nothing."""
        work_list.merge(["/tmp/a.exe"])
        log_sink.append("earlier line")
        picker = ArgumentPicker([])
        selector = self.make_selector(picker, work_list, log_sink, controller)

        assert selector.select() == []

        assert work_list.paths == ("/tmp/a.exe",)
        assert log_sink.lines == ("earlier line",)
        on_change.assert_not_called()

    def test_blank_only_selection_is_noop(self, work_list, log_sink, controller, on_change):
        """Test a pick of blank entries behaves like a cancellation."""
        selector = self.make_selector(ArgumentPicker(["", " "]), work_list, log_sink, controller)

        assert selector.select() == []
        assert work_list.is_empty()
        assert len(log_sink) == 0
        on_change.assert_not_called()

    def test_uses_picker_base_directory(self, work_list, log_sink, controller):
        """Test relative picks are resolved against the picker's directory."""
        picker = ArgumentPicker(["b.exe", "a.exe"], base_directory="/data")
        selector = self.make_selector(picker, work_list, log_sink, controller)

        selector.select()

        assert work_list.paths == ("/data/a.exe", "/data/b.exe")
