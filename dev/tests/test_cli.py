import sys
from pathlib import Path

import pytest

# Ensure repo root on path
ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import start_patchbin  # noqa: E402
from patchbin.app.api import EXIT_CODES  # noqa: E402
from patchbin.exceptions import EncodingError, InvalidRequest, PatchOutOfBounds, PatternNotFound  # noqa: E402


def test_cli_binary_patch_at_address(zero_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    output = tmp_path / "out.bin"

    code = start_patchbin.main(["-i", str(zero_file), "-o", str(output), "-a", "0x4", "-B", "0x0201"])

    assert code == 0
    assert output.read_bytes()[4:6] == b"\x02\x01"
    assert "Patched 2 byte(s) at 0x4" in capsys.readouterr().out


def test_cli_text_after_marker_with_show(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    source = tmp_path / "build.bin"
    source.write_bytes(bytes(10) + b"USERNAME:" + bytes(16))
    output = tmp_path / "named.bin"

    code = start_patchbin.main(["-i", str(source), "-o", str(output), "-t", "USERNAME:", "-T", "TREVOR", "--show"])

    assert code == 0
    assert output.read_bytes()[19:25] == b"TREVOR"
    out = capsys.readouterr().out
    assert "before:" in out and "after:" in out
    assert "54 52 45 56 4F 52" in out


@pytest.mark.parametrize(
    "argv",
    [
        ["-o", "out.bin", "-a", "0", "-B", "01"],
        ["-i", "in.bin", "-a", "0", "-B", "01"],
        ["-i", "in.bin", "-o", "out.bin", "-a", "0"],
        ["-i", "in.bin", "-o", "out.bin", "-a", "0", "-B", "01", "-T", "x"],
        ["-i", "in.bin", "-o", "out.bin", "-B", "01"],
        ["-i", "in.bin", "-o", "out.bin", "-a", "0", "-t", "x", "-B", "01"],
    ],
)
def test_cli_usage_errors(argv, capsys: pytest.CaptureFixture) -> None:
    assert start_patchbin.main(argv) == EXIT_CODES[InvalidRequest]
    assert "Error:" in capsys.readouterr().err


def test_cli_bad_address(zero_file: Path, tmp_path: Path) -> None:
    argv = ["-i", str(zero_file), "-o", str(tmp_path / "o.bin"), "-a", "0x1G", "-B", "01"]
    assert start_patchbin.main(argv) == EXIT_CODES[EncodingError]


def test_cli_failure_codes(zero_file: Path, tmp_path: Path) -> None:
    output = str(tmp_path / "o.bin")

    assert start_patchbin.main(["-i", str(zero_file), "-o", output, "-t", "NOPE", "-T", "x"]) == \
        EXIT_CODES[PatternNotFound]
    assert start_patchbin.main(["-i", str(zero_file), "-o", output, "-a", "0xF", "-B", "0x0102"]) == \
        EXIT_CODES[PatchOutOfBounds]


def test_cli_permissive_policy_from_env(zero_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    output = tmp_path / "o.bin"
    monkeypatch.setenv("PATCHBIN_HEX_POLICY", "permissive")

    code = start_patchbin.main(["-i", str(zero_file), "-o", str(output), "-a", "0x2", "-B", "0x7zz"])

    assert code == 0
    assert output.read_bytes()[2:4] == b"\x00\x07"


def test_cli_version(capsys: pytest.CaptureFixture) -> None:
    assert start_patchbin.main(["--version"]) == 0
    assert "Binary patch utility v" in capsys.readouterr().out
