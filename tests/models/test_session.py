"""Unit tests for Session transcript framing and state threading."""

import pytest

from models.extractor import GeneratedFileBatch
from models.filesystem import HOME_DIRECTORY, FileSystemState
from models.session import PROMPT_MARKER, Session
from tests.fixtures.workspace import create_filesystem, create_session


class TestSessionInstantiation:
    def test_fresh_session(self):
        session = Session()

        assert session.cwd == HOME_DIRECTORY
        assert session.transcript == PROMPT_MARKER
        assert session.history == ()

    def test_relative_cwd_rejected(self):
        with pytest.raises(ValueError):
            Session(cwd="home/user")


class TestSessionSubmit:
    def test_framing_with_output(self):
        session, _ = create_session().submit("pwd", FileSystemState())

        assert session.transcript == "$ pwd\n/home/user\n$ "

    def test_framing_without_output(self):
        session, _ = create_session().submit("mkdir src", FileSystemState())

        assert session.transcript == "$ mkdir src\n$ "

    def test_raw_line_is_echoed(self):
        session, _ = create_session().submit("  ls   ", FileSystemState())

        assert session.transcript == "$   ls   \noutputs/\n$ "

    def test_transcript_accumulates(self):
        filesystem = FileSystemState()
        session = create_session()

        session, filesystem = session.submit("foo", filesystem)
        session, filesystem = session.submit("cat", filesystem)

        assert session.transcript == (
            "$ foo\nfoo: command not found\n$ cat\ncat: missing file operand\n$ "
        )

    def test_blank_line_is_ignored(self):
        session = create_session()
        filesystem = FileSystemState()

        new_session, new_filesystem = session.submit("   ", filesystem)

        assert new_session is session
        assert new_filesystem is filesystem

    def test_submit_returns_new_filesystem(self):
        session, filesystem = create_session().submit("mkdir src", FileSystemState())

        assert filesystem.list_entries(HOME_DIRECTORY) == ["src"]

    def test_original_session_is_unchanged(self):
        session = create_session()

        session.submit("cd ..", FileSystemState())

        assert session.cwd == HOME_DIRECTORY
        assert session.transcript == PROMPT_MARKER

    def test_history_records_lines(self):
        session = create_session()
        filesystem = FileSystemState()

        session, filesystem = session.submit("ls", filesystem)
        session, filesystem = session.submit("clear", filesystem)

        assert session.history == ("ls", "clear")


class TestSessionClear:
    def test_clear_matches_fresh_transcript(self):
        session = create_session()
        filesystem = create_filesystem({"a.txt": "a"})
        for line in ["ls", "cat a.txt", "pwd", "help", "foo"] * 5:
            session, filesystem = session.submit(line, filesystem)

        session, _ = session.submit("clear", filesystem)

        assert session.transcript == Session().transcript

    def test_clear_keeps_cwd(self):
        session, filesystem = create_session().submit("cd ..", FileSystemState())

        session, _ = session.submit("clear", filesystem)

        assert session.cwd == "/home"

    def test_cd_keeps_transcript(self):
        session, filesystem = create_session().submit("pwd", FileSystemState())

        session, _ = session.submit("cd ..", filesystem)

        assert session.transcript.startswith("$ pwd\n/home/user\n$ ")
        assert session.cwd == "/home"


class TestReceiveGeneratedBatch:
    def test_merges_into_outputs_of_cwd(self):
        session = create_session()
        batch = GeneratedFileBatch(files={"hello.py": "print('hi')"})

        filesystem = session.receive_generated_batch(batch, FileSystemState())

        assert filesystem.read_file("/home/user/outputs", "hello.py") == "print('hi')"

    def test_transcript_untouched(self):
        session, filesystem = create_session().submit("pwd", FileSystemState())
        transcript = session.transcript

        session.receive_generated_batch(GeneratedFileBatch(files={"a": "b"}), filesystem)

        assert session.transcript == transcript

    def test_uses_current_cwd(self):
        session, filesystem = create_session().submit("cd ..", FileSystemState())

        filesystem = session.receive_generated_batch(GeneratedFileBatch(files={"a": "b"}), filesystem)

        assert filesystem.read_file("/home/outputs", "a") == "b"

    def test_snapshot(self):
        session, _ = create_session().submit("pwd", FileSystemState())

        assert session.get_snapshot() == {
            "cwd": HOME_DIRECTORY,
            "transcript": "$ pwd\n/home/user\n$ ",
            "history": ["pwd"],
        }
