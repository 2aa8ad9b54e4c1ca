from __future__ import annotations

import io
import json
import shutil
import subprocess
from pathlib import Path

import pytest

from cli import main

requires_git = pytest.mark.skipif(
    shutil.which("git") is None, reason="git executable not available"
)


def _copy_mini_repo_fixture(root: Path) -> None:
    fixture_repo = Path(__file__).parent / "fixtures" / "mini_repo"
    shutil.copytree(fixture_repo, root)


def _git(repo_root: Path, *args: str) -> None:
    subprocess.run(
        [
            "git",
            "-c",
            "user.name=coderef",
            "-c",
            "user.email=coderef@example.com",
            "-c",
            "commit.gpgsign=false",
            *args,
        ],
        cwd=repo_root,
        check=True,
        capture_output=True,
    )


def _init_git_repo(repo_root: Path, origin: str) -> None:
    _git(repo_root, "init")
    _git(repo_root, "symbolic-ref", "HEAD", "refs/heads/main")
    _git(repo_root, "remote", "add", "origin", origin)
    _git(repo_root, "add", ".")
    _git(repo_root, "commit", "-m", "fixture")


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    root = tmp_path / "repo"
    _copy_mini_repo_fixture(root)
    return root


def test_cli_copy_filename_with_line(
    repo_root: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(
        [
            "copy",
            f"{repo_root / 'pkg_a' / 'core.py'}:12",
            "--workspace",
            str(repo_root),
            "--type",
            "Filename (with line)",
            "--no-link",
        ]
    )

    assert exit_code == 0
    assert capsys.readouterr().out == "`pkg_a/core.py:12`\n"


def test_cli_copy_selection_without_relative_path(
    repo_root: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(
        [
            "copy",
            f"{repo_root / 'pkg_a' / 'core.py'}:12-18",
            "--workspace",
            str(repo_root),
            "--type",
            "Filename",
            "--no-link",
            "--no-relative-path",
        ]
    )

    assert exit_code == 0
    assert capsys.readouterr().out == "`core.py:12-18`\n"


def test_cli_copy_symbol_under_cursor(
    repo_root: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(
        [
            "copy",
            f"{repo_root / 'pkg_a' / 'core.py'}:13",
            "--workspace",
            str(repo_root),
            "--type",
            "Symbol",
            "--no-link",
        ]
    )

    assert exit_code == 0
    assert capsys.readouterr().out == "`Greeter.greet`\n"


def test_cli_copy_prompts_for_type(
    repo_root: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("3\n"))

    exit_code = main(
        [
            "copy",
            f"{repo_root / 'pkg_a' / 'core.py'}:5",
            "--workspace",
            str(repo_root),
            "--no-link",
        ]
    )

    captured = capsys.readouterr()
    assert exit_code == 0
    assert captured.out == "`pkg_a/core.py`\n"
    assert "Select reference type" in captured.err
    assert "1) Symbol" in captured.err


def test_cli_copy_cancelled_prompt_is_silent(
    repo_root: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(""))

    exit_code = main(
        [
            "copy",
            f"{repo_root / 'pkg_a' / 'core.py'}:5",
            "--workspace",
            str(repo_root),
            "--no-link",
        ]
    )

    captured = capsys.readouterr()
    assert exit_code == 0
    assert captured.out == ""
    assert "No identifiable reference" not in captured.err


def test_cli_copy_reports_nothing_identifiable(
    repo_root: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(
        [
            "copy",
            f"{repo_root / 'pkg_a' / 'core.py'}:3",
            "--workspace",
            str(repo_root),
            "--type",
            "Symbol",
            "--no-link",
        ]
    )

    assert exit_code == 1
    assert "No identifiable reference to copy" in capsys.readouterr().err


def test_cli_copy_missing_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(["copy", str(tmp_path / "missing.py"), "--type", "Symbol"])

    assert exit_code == 2
    assert "Failed to copy reference" in capsys.readouterr().err


def test_cli_copy_rejects_reversed_range(
    repo_root: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(["copy", f"{repo_root / 'pkg_a' / 'core.py'}:9-3"])

    assert exit_code == 2
    assert "invalid line range" in capsys.readouterr().err


def test_cli_copy_invalid_config(
    repo_root: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (repo_root / "coderef.toml").write_text("bogus_key = true\n", encoding="utf-8")

    exit_code = main(
        ["copy", str(repo_root / "pkg_a" / "core.py"), "--workspace", str(repo_root)]
    )

    assert exit_code == 2
    assert "Invalid config" in capsys.readouterr().err


def test_cli_copy_uses_configured_type(
    repo_root: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (repo_root / "coderef.toml").write_text(
        'cursor_reference_type = "Filename (no line)"\nlink_source = false\n',
        encoding="utf-8",
    )

    exit_code = main(
        ["copy", f"{repo_root / 'pkg_a' / 'core.py'}:2", "--workspace", str(repo_root)]
    )

    assert exit_code == 0
    assert capsys.readouterr().out == "`pkg_a/core.py`\n"


def test_cli_copy_json(repo_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(
        [
            "copy",
            f"{repo_root / 'pkg_a' / 'core.py'}:7",
            "--workspace",
            str(repo_root),
            "--type",
            "Filename (with line)",
            "--no-link",
            "--json",
        ]
    )

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["text"] == "`pkg_a/core.py:7`"
    assert payload["reference"]["type"] == "Filename (with line)"
    assert payload["reference"]["range"] == {"kind": "cursor", "line": 7}
    assert payload["reference"]["file_name"] == "core.py"


def test_cli_outline(repo_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["outline", str(repo_root / "pkg_a" / "core.py")])

    assert exit_code == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "class Greeter L6-L22"
    assert "  method greet L12-L18" in lines
    assert lines[-1] == "function compute_value L25-L26"


@requires_git
def test_cli_remote_reports_normalized_origin(
    repo_root: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _init_git_repo(repo_root, "git@github.com:acme/widgets.git")

    exit_code = main(["remote", str(repo_root)])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out) == {
        "provider": "github",
        "url": "https://github.com/acme/widgets",
    }


@requires_git
def test_cli_remote_outside_repository_is_unknown(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(["remote", str(tmp_path)])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out) == {"provider": "unknown"}


@requires_git
def test_cli_copy_links_from_git_root(
    repo_root: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _init_git_repo(repo_root, "git@github.com:acme/widgets.git")

    exit_code = main(
        [
            "copy",
            f"{repo_root / 'pkg_a' / 'core.py'}:7",
            "--workspace",
            str(repo_root / "pkg_a"),
            "--type",
            "Filename (with line)",
        ]
    )

    assert exit_code == 0
    assert capsys.readouterr().out == (
        "`core.py:7` "
        "([GitHub](https://github.com/acme/widgets/blob/main/pkg_a/core.py#L7))\n"
    )
