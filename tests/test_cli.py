import io
import signal

import pytest

from fuzzgauntlet.cli import main, read_input, run_target
from fuzzgauntlet.common import TargetReached

U8_INPUT = b"ACEGIKMZY\x00\x01\x80"


def test_read_input_truncates_to_limit(tmp_path):
    path = tmp_path / "input.bin"
    path.write_bytes(b"0123456789")
    assert read_input(str(path), 4) == b"0123"
    assert read_input(str(path), 64) == b"0123456789"


def test_read_input_from_stdin(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(b"Hi!there")))
    assert read_input(None, 3) == b"Hi!"


def test_run_target_reached():
    with pytest.raises(TargetReached):
        run_target("u8", U8_INPUT)
    with pytest.raises(TargetReached):
        run_target("simple", b"Hi!")


def test_run_target_returns_rejection():
    rejection = run_target("u8", b"short")
    assert rejection.message == "too short"
    assert rejection.position == 0
    wrong = run_target("u8", b"ACEGIKMZY\x00\x01\x7f")
    assert wrong.position == 11


def test_run_target_without_rejection():
    assert run_target("simple", b"Ho!") is None
    with pytest.raises(TargetReached):
        run_target("simple", b"Hi!!")


def test_run_target_unknown_name():
    with pytest.raises(KeyError):
        run_target("no-such-target", b"data")


def test_main_reports_reached(tmp_path, capsys):
    path = tmp_path / "u8.bin"
    path.write_bytes(U8_INPUT)
    assert main(["u8", str(path)]) == 128 + signal.SIGABRT
    assert "BINGO" in capsys.readouterr().err


def test_main_reports_bail(tmp_path, capsys):
    path = tmp_path / "short.bin"
    path.write_bytes(b"ACE")
    assert main(["u8", str(path)]) == 0
    assert "too short at 0" in capsys.readouterr().err


def test_main_empty_input(tmp_path, capsys):
    path = tmp_path / "empty.bin"
    path.write_bytes(b"")
    assert main(["simple", str(path)]) == 0
    assert capsys.readouterr().err == ""


def test_main_reads_stdin(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(b"Hi!")))
    assert main(["simple"]) == 128 + signal.SIGABRT


def test_main_rejects_unknown_target():
    with pytest.raises(SystemExit) as excinfo:
        main(["no-such-target"])
    assert excinfo.value.code == 2