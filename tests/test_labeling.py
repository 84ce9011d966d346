"""
Labeling Tool Tests — scripted annotator sessions over a guard log.
"""

import json

import pytest

from honestra.guard import guard
from honestra.guard_log import append_entry, entry_key, make_entry, read_entries
from honestra.labeling import ask_level, format_entry, label_entries, main


def scripted(*answers):
    """An input() stand-in that replays answers, then behaves like EOF."""
    queue = list(answers)

    def ask(prompt):
        if not queue:
            raise EOFError
        return queue.pop(0)
    return ask


@pytest.fixture
def log_file(tmp_path):
    path = tmp_path / "honestra_log.jsonl"
    first = make_entry("I want to help you.", guard("I want to help you.").to_dict(),
                       session_id="s1", user_message="Help?")
    second = make_entry("Sales rose.", guard("Sales rose.").to_dict())
    second["timestamp"] = "2025-01-01T00:00:00+00:00"
    append_entry(path, first)
    with path.open("a", encoding="utf-8") as fh:
        fh.write("{not json\n")
    append_entry(path, second)
    return path


class TestGuardLog:

    def test_default_session_key(self):
        assert entry_key({"timestamp": "t"}) == "t::no-session"
        assert entry_key({"timestamp": "t", "sessionId": "abc"}) == "t::abc"

    def test_malformed_lines_skipped(self, log_file):
        assert len(list(read_entries(log_file))) == 2

    def test_missing_file_yields_nothing(self, tmp_path):
        assert list(read_entries(tmp_path / "absent.jsonl")) == []


class TestLabelingSession:

    def test_label_and_skip(self, log_file, tmp_path):
        out_path = tmp_path / "labeled.jsonl"
        stats = label_entries(log_file, out_path,
                              ask=scripted("2", "sounds like intent", "1", "", "s"),
                              out=lambda _: None)
        assert stats.processed == 2
        assert stats.labeled == 1
        assert stats.skipped == 1

        labeled, skipped = list(read_entries(out_path))
        assert labeled["teleology_level"] == 2
        assert labeled["adequacy_level"] == 1
        assert labeled["teleology_note"] == "sounds like intent"
        assert "adequacy_note" not in labeled
        assert labeled["sessionId"] == "s1"
        assert skipped["skip"] is True

    def test_rerun_skips_labeled(self, log_file, tmp_path):
        out_path = tmp_path / "labeled.jsonl"
        label_entries(log_file, out_path, ask=scripted("0", "", "2", "", "s"), out=lambda _: None)

        def never(prompt):
            raise AssertionError("should not prompt")

        stats = label_entries(log_file, out_path, ask=never, out=lambda _: None)
        assert stats.already_labeled == 2
        assert stats.labeled == 0

    def test_quit_writes_nothing(self, log_file, tmp_path):
        out_path = tmp_path / "labeled.jsonl"
        stats = label_entries(log_file, out_path, ask=scripted("q"), out=lambda _: None)
        assert stats.labeled == 0
        assert not out_path.exists()

    def test_eof_quits(self, log_file, tmp_path):
        out_path = tmp_path / "labeled.jsonl"
        stats = label_entries(log_file, out_path, ask=scripted(), out=lambda _: None)
        assert stats.processed == 1
        assert not out_path.exists()

    def test_missing_input_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            label_entries(tmp_path / "absent.jsonl", tmp_path / "out.jsonl")


class TestPrompts:

    def test_invalid_input_retried(self):
        printed = []
        answer = ask_level(scripted("7", "maybe", "1"), printed.append, "Level? ")
        assert answer == 1
        assert len(printed) == 2
        assert printed[0].startswith("Invalid input.")

    def test_skip_only_when_allowed(self):
        printed = []
        assert ask_level(scripted("s", "0"), printed.append, "Level? ") == 0
        assert ask_level(scripted("s"), printed.append, "Level? ", allow_skip=True) == "s"

    def test_format_shows_drift(self):
        entry = make_entry("I want to help you.", {"hasTeleology": False, "reasons": []})
        text = format_entry(entry, 1, guard("I want to help you."))
        assert "MODEL REPLY:" in text
        assert "anthropomorphic_self" in text
        assert "(replay differs from logged result)" in text

    def test_format_no_drift(self):
        payload = guard("I want to help you.")
        entry = make_entry("I want to help you.", payload.to_dict())
        assert "differs" not in format_entry(entry, 1, payload)


class TestMain:

    def test_missing_input_returns_1(self, tmp_path, capsys):
        code = main(["--input", str(tmp_path / "absent.jsonl"), "--output", str(tmp_path / "o.jsonl")])
        assert code == 1
        assert "Input file not found" in capsys.readouterr().err

    def test_session_summary(self, log_file, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr("builtins.input", scripted("s", "s"))
        code = main(["--input", str(log_file), "--output", str(tmp_path / "o.jsonl")])
        assert code == 0
        out = capsys.readouterr().out
        assert "Total entries processed: 2" in out
        assert "Skipped: 2" in out
