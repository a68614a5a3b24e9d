"""Tests for git root and file-set queries, driven by a fake runner."""

import pytest

from lintscope.config import UntrackedPolicy
from lintscope.exceptions import VCSError
from lintscope.vcs.git import (
    INTENT_TO_ADD,
    LIST_UNTRACKED,
    SHOW_TOPLEVEL,
    diff_added_command,
    locate_root,
    ls_tree_command,
    parse_path_list,
    resolve_added_files,
    resolve_old_files,
)


class TestParsePathList:
    def test_trims_and_drops_blank_lines(self):
        assert parse_path_list("  a.py \n\n b/c.py\n   \n") == frozenset({"a.py", "b/c.py"})

    def test_empty_output(self):
        assert parse_path_list("") == frozenset()

    def test_duplicates_collapse(self):
        assert parse_path_list("a.py\na.py") == frozenset({"a.py"})


class TestLocateRoot:
    def test_appends_one_separator(self, fake_runner):
        runner = fake_runner({SHOW_TOPLEVEL: "/repo"})
        assert locate_root(runner, "/repo/app") == "/repo/"
        assert runner.calls == [("/repo/app", SHOW_TOPLEVEL)]

    def test_keeps_single_separator(self, fake_runner):
        runner = fake_runner({SHOW_TOPLEVEL: "/repo/\n"})
        assert locate_root(runner, "/repo") == "/repo/"

    def test_empty_output_is_none(self, fake_runner):
        assert locate_root(fake_runner(), "/not-a-repo") is None

    def test_runner_failure_propagates(self, fake_runner):
        with pytest.raises(VCSError):
            locate_root(fake_runner(failures=[SHOW_TOPLEVEL]), "/repo")


class TestResolveOldFiles:
    def test_lists_tree_at_ref(self, fake_runner):
        runner = fake_runner({ls_tree_command("main"): "A.java\nsrc/B.java"})
        assert resolve_old_files(runner, "/repo/", "main") == frozenset({"A.java", "src/B.java"})
        assert runner.calls == [("/repo/", ls_tree_command("main"))]

    @pytest.mark.parametrize("ref", [None, ""])
    def test_no_ref_no_query(self, fake_runner, ref):
        runner = fake_runner()
        assert resolve_old_files(runner, "/repo/", ref) is None
        assert runner.calls == []

    def test_unknown_ref_gives_empty_set(self, fake_runner):
        assert resolve_old_files(fake_runner(), "/repo/", "nope") == frozenset()


class TestResolveAddedFiles:
    def test_intent_to_add_runs_before_diff(self, fake_runner):
        runner = fake_runner({diff_added_command("main"): "New.java\nres/new.xml"})
        files = resolve_added_files(runner, "/repo/", "main")
        assert files == frozenset({"New.java", "res/new.xml"})
        assert runner.commands() == [INTENT_TO_ADD, diff_added_command("main")]

    def test_list_untracked_leaves_index_alone(self, fake_runner):
        runner = fake_runner(
            {
                diff_added_command("main"): "New.java",
                LIST_UNTRACKED: "Scratch.java",
            }
        )
        files = resolve_added_files(runner, "/repo/", "main", UntrackedPolicy.LIST_UNTRACKED)
        assert files == frozenset({"New.java", "Scratch.java"})
        assert INTENT_TO_ADD not in runner.commands()

    @pytest.mark.parametrize("ref", [None, ""])
    def test_no_ref_no_query(self, fake_runner, ref):
        runner = fake_runner()
        assert resolve_added_files(runner, "/repo/", ref) is None
        assert runner.calls == []
