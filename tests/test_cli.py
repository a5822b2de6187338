import pytest

from portsweep import cli


def test_no_args_prints_help(capsys):
    assert cli.main([]) == 0
    assert "usage: portsweep" in capsys.readouterr().out


def test_help_flag_exits_cleanly(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["-h"])
    assert exc.value.code == 0
    assert "-p PORTS" in capsys.readouterr().out


@pytest.mark.parametrize(
    "argv",
    [
        ["127.0.0.1", "-x"],
        ["127.0.0.1", "-t", "many"],
        ["127.0.0.1", "-t", "0"],
        ["127.0.0.1", "-p"],
        ["127.0.0.1", "--timeout", "0"],
        ["not-an-ip"],
        ["-p", "80"],
    ],
)
def test_configuration_errors_exit_before_scanning(argv, capsys, monkeypatch):
    def no_scan(*args, **kwargs):
        raise AssertionError("scan started")

    monkeypatch.setattr(cli, "run_scan", no_scan)
    with pytest.raises(SystemExit) as exc:
        cli.main(argv)
    assert exc.value.code == 2
    assert "usage: portsweep" in capsys.readouterr().err


def test_missing_target_file(tmp_path, caplog):
    assert cli.main(["-f", str(tmp_path / "nope.txt")]) == 1
    assert "Error opening file" in caplog.text


def test_scan_to_stdout(listener, closed_port, capsys):
    assert cli.main(["127.0.0.1", "-p", f"{closed_port},{listener}", "-t", "2"]) == 0
    assert capsys.readouterr().out == f"127.0.0.1: Port {listener} is open\n"


def test_scan_from_file_to_output_file(tmp_path, listener, capsys):
    targets = tmp_path / "targets.txt"
    targets.write_text("127.0.0.1\nbogus\n")
    out = tmp_path / "open.txt"

    code = cli.main(["-p", str(listener), "-o", str(out), "-t", "3", "-f", str(targets)])

    assert code == 0
    assert out.read_text() == f"127.0.0.1: Port {listener} is open\n"
    assert capsys.readouterr().out == ""


def test_flags_after_targets_file_are_ignored(tmp_path, listener, capsys):
    targets = tmp_path / "targets.txt"
    targets.write_text("127.0.0.1\n")
    out = tmp_path / "open.txt"

    code = cli.main(["-p", str(listener), "-f", str(targets), "-o", str(out), "-x", "-t", "zero"])

    assert code == 0
    assert not out.exists()
    assert capsys.readouterr().out == f"127.0.0.1: Port {listener} is open\n"
