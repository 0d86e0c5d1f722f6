"""
Tests for the Subversion backend using a stubbed svn command runner.
"""

import subprocess
from datetime import datetime
from datetime import timezone
from pathlib import Path

import pytest

from repoinfo.errors import NotAVersionControlledTree
from repoinfo.vcs import SubversionBackend
from repoinfo.vcs import svn_backend

INFO_XML = """<?xml version="1.0" encoding="UTF-8"?>
<info>
<entry kind="dir" path="." revision="615">
<url>svn://addr/app/trunk/mta</url>
<relative-url>^/trunk/mta</relative-url>
<repository>
<root>svn://addr/app</root>
<uuid>0f3ab5c8-9f77-4e7a-9d2e-1a2b3c4d5e6f</uuid>
</repository>
<wc-info>
<wcroot-abspath>/work/mta</wcroot-abspath>
<schedule>normal</schedule>
<depth>infinity</depth>
</wc-info>
<commit revision="612">
<author>alice</author>
<date>2019-01-18T17:00:52.123456Z</date>
</commit>
</entry>
</info>
"""

STATUS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<status>
<target path=".">
<entry path="src/main.c">
<wc-status item="modified" props="none" revision="615">
<commit revision="612"><author>alice</author><date>2019-01-18T17:00:52.123456Z</date></commit>
</wc-status>
</entry>
<entry path="src/new.c">
<wc-status item="added" props="none" revision="-1"></wc-status>
</entry>
<entry path="notes.txt">
<wc-status item="unversioned" props="none"></wc-status>
</entry>
</target>
</status>
"""


class StubRunner:
    """Records svn invocations and answers with canned XML."""

    def __init__(self, info: str = INFO_XML, status: str = STATUS_XML) -> None:
        self.outputs = {"info": info, "status": status}
        self.calls: list[list[str]] = []

    def __call__(self, args: list[str], cwd: Path) -> str:
        self.calls.append(args)
        return self.outputs[args[0]]


@pytest.fixture
def working_copy(tmp_path: Path) -> Path:
    root = tmp_path / "wc"
    (root / ".svn").mkdir(parents=True)
    (root / "src").mkdir()
    return root


@pytest.mark.unit
class TestSubversionBackend:
    """Test SubversionBackend parsing."""

    def test_probe_finds_svn_directory_in_parents(self, working_copy: Path, tmp_path: Path) -> None:
        assert SubversionBackend.probe(working_copy)
        assert SubversionBackend.probe(working_copy / "src")
        assert not SubversionBackend.probe(tmp_path)

    def test_revision_and_url(self, working_copy: Path) -> None:
        backend = SubversionBackend(working_copy, runner=StubRunner())

        assert backend.revision() == "615"
        assert backend.revision(hash_length=2) == "615"
        assert backend.remote_url() == "svn://addr/app/trunk/mta"

    def test_info_is_queried_once(self, working_copy: Path) -> None:
        runner = StubRunner()
        backend = SubversionBackend(working_copy, runner=runner)

        backend.revision()
        backend.remote_url()
        backend.author()

        assert runner.calls == [["info", "--xml", "."]]

    def test_last_change_is_commit_date_in_utc(self, working_copy: Path) -> None:
        backend = SubversionBackend(working_copy, runner=StubRunner())

        assert backend.last_change() == datetime(2019, 1, 18, 17, 0, 52, 123456, tzinfo=timezone.utc)

    def test_author_has_no_email(self, working_copy: Path) -> None:
        backend = SubversionBackend(working_copy, runner=StubRunner())

        assert backend.author() == ("alice", None)

    def test_working_copy_root(self, working_copy: Path) -> None:
        backend = SubversionBackend(working_copy, runner=StubRunner())

        assert backend.working_copy_root() == Path("/work/mta")

    def test_modified_files_skip_unversioned(self, working_copy: Path) -> None:
        backend = SubversionBackend(working_copy, runner=StubRunner())

        assert backend.modified_files() == [
            working_copy.resolve() / "src/main.c",
            working_copy.resolve() / "src/new.c",
        ]

    def test_unparseable_output_raises(self, working_copy: Path) -> None:
        backend = SubversionBackend(working_copy, runner=StubRunner(info="svn: E155007: not a working copy"))

        with pytest.raises(NotAVersionControlledTree, match="unreadable svn info output"):
            backend.revision()

    def test_missing_entry_raises(self, working_copy: Path) -> None:
        backend = SubversionBackend(working_copy, runner=StubRunner(info="<info></info>"))

        with pytest.raises(NotAVersionControlledTree):
            backend.remote_url()


@pytest.mark.unit
class TestRunSvn:
    """Test the default svn command runner."""

    def test_missing_executable(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_run(*args, **kwargs):
            raise FileNotFoundError("svn")

        monkeypatch.setattr(svn_backend.subprocess, "run", fake_run)

        with pytest.raises(NotAVersionControlledTree, match="svn executable not found"):
            svn_backend.run_svn(["info", "--xml", "."], tmp_path)

    def test_command_failure(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_run(cmd, **kwargs):
            raise subprocess.CalledProcessError(1, cmd, output="", stderr="svn: E155007: not a working copy\n")

        monkeypatch.setattr(svn_backend.subprocess, "run", fake_run)

        with pytest.raises(NotAVersionControlledTree, match="E155007"):
            svn_backend.run_svn(["info", "--xml", "."], tmp_path)

    def test_passes_non_interactive(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        seen = {}

        def fake_run(cmd, **kwargs):
            seen["cmd"] = cmd
            seen["cwd"] = kwargs["cwd"]
            return subprocess.CompletedProcess(cmd, 0, stdout=INFO_XML, stderr="")

        monkeypatch.setattr(svn_backend.subprocess, "run", fake_run)

        assert svn_backend.run_svn(["info", "--xml", "."], tmp_path) == INFO_XML
        assert seen["cmd"] == ["svn", "--non-interactive", "info", "--xml", "."]
        assert seen["cwd"] == str(tmp_path)
