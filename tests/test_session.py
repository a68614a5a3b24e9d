"""Tests for session construction: scenarios end to end with a fake runner."""

import threading

from lintscope.config import FilterMode
from lintscope.session import LazySession, open_session
from lintscope.vcs.git import INTENT_TO_ADD, SHOW_TOPLEVEL, diff_added_command, ls_tree_command
from lintscope.vcs.runner import SubprocessRunner

CONFIG = {"git-base": "main", "git-based-issues": ["RULE_X"]}


def _old_files_runner(fake_runner):
    return fake_runner({SHOW_TOPLEVEL: "/repo", ls_tree_command("main"): "A.java"})


class _RootThenSubprocess:
    """Answers the root query itself and runs everything else for real."""

    def __init__(self, root):
        self.root = root

    def run(self, cwd, args):
        if tuple(args) == SHOW_TOPLEVEL:
            return self.root
        return SubprocessRunner().run(cwd, args)


class TestOpenSession:
    def test_old_files_scenario(self, write_config, fake_runner):
        project = write_config(CONFIG)
        session = open_session(project, runner=_old_files_runner(fake_runner))

        assert session.repo_root == "/repo/"
        assert session.file_set == frozenset({"A.java"})
        assert session.should_report("RULE_X", "/repo/A.java") is False
        assert session.should_report("RULE_X", "/repo/B.java") is True

    def test_rule_outside_set_reported(self, write_config, fake_runner):
        project = write_config(CONFIG)
        session = open_session(project, runner=_old_files_runner(fake_runner))
        assert session.should_report("RULE_Y", "/repo/A.java") is True

    def test_no_config_reports_everything_without_git(self, tmp_path, fake_runner):
        runner = _old_files_runner(fake_runner)
        session = open_session(tmp_path, runner=runner)
        assert session.should_report("RULE_X", "/repo/A.java") is True
        assert runner.calls == []

    def test_added_files_scenario(self, write_config, fake_runner):
        project = write_config({**CONFIG, "filter-mode": "report-only-added"})
        runner = fake_runner({SHOW_TOPLEVEL: "/repo", diff_added_command("main"): "New.java"})
        session = open_session(project, runner=runner)

        assert session.mode is FilterMode.REPORT_ONLY_ADDED
        assert session.should_report("RULE_X", "/repo/New.java") is True
        assert session.should_report("RULE_X", "/repo/Old.java") is False
        assert runner.commands() == [SHOW_TOPLEVEL, INTENT_TO_ADD, diff_added_command("main")]

    def test_not_a_repository_reports_everything(self, write_config, fake_runner):
        project = write_config(CONFIG)
        runner = fake_runner({ls_tree_command("main"): "A.java"})
        session = open_session(project, runner=runner)

        assert session.repo_root is None
        assert session.should_report("RULE_X", "/repo/A.java") is True
        assert runner.commands() == [SHOW_TOPLEVEL]

    def test_git_failure_reports_everything(self, write_config, fake_runner):
        project = write_config(CONFIG)
        runner = fake_runner({SHOW_TOPLEVEL: "/repo"}, failures=[ls_tree_command("main")])
        session = open_session(project, runner=runner)

        assert session.file_set is None
        assert session.should_report("RULE_X", "/repo/A.java") is True

    def test_missing_baseline_reports_everything(self, write_config, fake_runner):
        project = write_config({"git-based-issues": ["RULE_X"]})
        session = open_session(project, runner=_old_files_runner(fake_runner))
        assert session.file_set is None
        assert session.should_report("RULE_X", "/repo/A.java") is True

    def test_configured_log_file_receives_diagnostics(self, write_config, fake_runner, tmp_path):
        project = write_config({**CONFIG, "log-file": "lint.log"})
        open_session(project, runner=_old_files_runner(fake_runner))

        text = (tmp_path / "lint.log").read_text(encoding="utf-8")
        assert "git base = main, git dir = /repo/" in text
        assert "git old files = \nA.java\n" in text

    def test_unopenable_log_file_keeps_filtering(self, write_config, fake_runner):
        project = write_config({**CONFIG, "log-file": "a\u0000.log"})
        session = open_session(project, runner=_old_files_runner(fake_runner))
        assert session.should_report("RULE_X", "/repo/A.java") is False

    def test_unrunnable_baseline_reports_everything(self, write_config, tmp_path):
        project = write_config({**CONFIG, "git-base": "main\u0000"})
        session = open_session(project, runner=_RootThenSubprocess(str(tmp_path)))
        assert session.repo_root is None
        assert session.should_report("RULE_X", str(tmp_path / "A.java")) is True

    def test_non_utf8_config_reports_everything(self, tmp_path, fake_runner):
        (tmp_path / "custom-lint-config.json").write_bytes(
            b'{"git-base": "main", "git-based-issues": ["RULE_X"], "log-file": "caf\xe9.log"}'
        )
        runner = _old_files_runner(fake_runner)
        lazy = LazySession(tmp_path, runner=runner)
        assert lazy.should_report("RULE_X", "/repo/A.java") is True
        assert runner.calls == []

    def test_symlinked_project_warns(self, write_config, fake_runner, tmp_path):
        real = tmp_path / "real"
        real.mkdir()
        link = tmp_path / "link"
        link.symlink_to(real, target_is_directory=True)
        write_config({**CONFIG, "log-file": "lint.log"}, project=real)
        runner = fake_runner({SHOW_TOPLEVEL: str(real), ls_tree_command("main"): "A.java"})

        session = open_session(link, runner=runner)

        assert session.should_report("RULE_X", str(link / "A.java")) is True
        text = (real / "lint.log").read_text(encoding="utf-8")
        assert f"Project path {link} is not under git root {real}/" in text


class TestLazySession:
    def test_same_instance_and_single_git_run(self, write_config, fake_runner):
        project = write_config(CONFIG)
        runner = _old_files_runner(fake_runner)
        lazy = LazySession(project, runner=runner)

        first = lazy.get()
        assert lazy.get() is first
        assert lazy.should_report("RULE_X", "/repo/A.java") is False
        assert lazy.should_report("RULE_X", "/repo/B.java") is True
        assert runner.commands() == [SHOW_TOPLEVEL, ls_tree_command("main")]

    def test_nothing_runs_before_first_query(self, write_config, fake_runner):
        project = write_config(CONFIG)
        runner = _old_files_runner(fake_runner)
        LazySession(project, runner=runner)
        assert runner.calls == []

    def test_concurrent_first_use_builds_once(self, write_config, fake_runner):
        project = write_config(CONFIG)
        runner = _old_files_runner(fake_runner)
        lazy = LazySession(project, runner=runner)

        start = threading.Barrier(8)
        results = []

        def query():
            start.wait()
            results.append(lazy.get())

        threads = [threading.Thread(target=query) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(r is results[0] for r in results)
        assert runner.commands() == [SHOW_TOPLEVEL, ls_tree_command("main")]
