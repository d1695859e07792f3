import sys

from brodef.browser.runner import FileSystem, run_command


def test_run_command_returns_stdout_untrimmed() -> None:
    output = run_command(sys.executable, ["-c", "print('hello')"])
    assert output.strip() == "hello"
    assert output.endswith("\n")


def test_run_command_maps_failures_to_empty_string() -> None:
    assert run_command("brodef-no-such-tool-xyz", ["--version"]) == ""
    assert run_command(sys.executable, ["-c", "import sys; print('partial'); sys.exit(3)"]) == ""


def test_run_command_ignores_stderr() -> None:
    output = run_command(sys.executable, ["-c", "import sys; sys.stderr.write('noise')"])
    assert output == ""


def test_run_command_times_out_quietly() -> None:
    assert run_command(sys.executable, ["-c", "import time; time.sleep(5)"], timeout=0.2) == ""


def test_filesystem_checks(tmp_path) -> None:
    target = tmp_path / "chrome"
    target.write_text("", encoding="utf-8")
    fs = FileSystem()
    assert fs.exists(str(target))
    assert fs.is_file(str(target))
    assert not fs.is_dir(str(target))
    assert fs.is_dir(str(tmp_path))
    assert not fs.exists(str(tmp_path / "missing"))


def test_run_command_keeps_text_around_undecodable_bytes() -> None:
    script = (
        "import sys; sys.stdout.buffer.write("
        "b'bundle id: com.kagi.kagimacOS\\nclaimed schemes: http:\\n\\xff\\n')"
    )
    output = run_command(sys.executable, ["-c", script])
    assert "bundle id: com.kagi.kagimacOS" in output
    assert "claimed schemes: http:" in output
    assert "�" in output
