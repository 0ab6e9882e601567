from __future__ import annotations

"""
Unit tests for the CLI Application Controller.

Runs `main()` end to end against temporary listing files and checks exit
codes and the three output modes (summary, ASCII tree, JSON layout).
"""

import json
from pathlib import Path
from typing import List

import pytest

from gitscape.infra.logging import shutdown_logging
from gitscape.interface.cli.app import main


@pytest.fixture(autouse=True)
def reset_logging():
    """Each run configures logging against the captured stderr."""
    yield
    shutdown_logging()


@pytest.fixture
def listing_file(tmp_path: Path) -> Path:
    items = [
        {"path": "a/b.txt", "mode": "100644", "type": "blob", "size": 10},
        {"path": "a/c/d.txt", "mode": "100644", "type": "blob", "size": 20},
    ]
    path = tmp_path / "tree.json"
    path.write_text(json.dumps({"sha": "abc", "tree": items, "truncated": False}), encoding="utf-8")
    return path


def _run(listing_file: Path, *extra: str) -> int:
    argv: List[str] = ["-i", str(listing_file), "--repo", "org/repo", "--use-defaults", *extra]
    return main(argv)

# -----------------------------------------------------------------------------
# OUTPUT MODES
# -----------------------------------------------------------------------------

def test_human_summary(listing_file: Path, capsys) -> None:
    assert _run(listing_file, "--width", "800", "--height", "600") == 0

    out = capsys.readouterr().out.splitlines()
    assert out[0] == "org/repo@main: 5 nodes, 2 visible, depth 1."
    assert out[1] == "Initial view: translate(160.0,300.0) scale(0.85)"


def test_expand_all_summary(listing_file: Path, capsys) -> None:
    assert _run(listing_file, "--expand-all") == 0
    assert "5 visible, depth 3" in capsys.readouterr().out


def test_print_tree(listing_file: Path, capsys) -> None:
    assert _run(listing_file, "--print-tree") == 0

    out = capsys.readouterr().out.splitlines()
    assert out == [
        "repo/",
        "└── a/",
        "    ├── b.txt",
        "    └── c/",
        "        └── d.txt",
    ]


def test_json_layout(listing_file: Path, capsys) -> None:
    code = _run(listing_file, "--json", "--width", "800", "--height", "600", "--branch", "dev")
    assert code == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["display_name"] == "org/repo"
    assert payload["branch"] == "dev"
    assert payload["transform"] == {"translate_x": 160.0, "translate_y": 300.0, "scale": 0.85}

    nodes = {n["id"]: n for n in payload["nodes"]}
    assert list(nodes) == ["", "a"]
    assert nodes[""]["label"] == "repo"
    assert (nodes["a"]["x"], nodes["a"]["y"]) == (150.0, 0.0)
    assert nodes["a"]["expanded"] is False

    (link,) = payload["links"]
    assert (link["source"], link["target"]) == ("", "a")
    assert link["path"].startswith("M0")


def test_json_file_urls(listing_file: Path, capsys) -> None:
    assert _run(listing_file, "--json", "--expand-all") == 0

    nodes = {n["id"]: n for n in json.loads(capsys.readouterr().out)["nodes"]}
    assert nodes["a/c/d.txt"]["url"] == "https://github.com/org/repo/blob/main/a/c/d.txt"
    assert "url" not in nodes["a/c"]


def test_dump_config_needs_no_input(capsys) -> None:
    assert main(["--use-defaults", "--dump-config", "--node-spacing", "40"]) == 0

    config = json.loads(capsys.readouterr().out)
    assert config["node_spacing"] == 40.0


def test_config_file_is_applied(listing_file: Path, tmp_path: Path, capsys) -> None:
    conf = tmp_path / "conf.json"
    conf.write_text(json.dumps({"initial_scale": 0.5}), encoding="utf-8")

    code = main(["-i", str(listing_file), "--repo", "org/repo", "--config", str(conf), "--json"])
    assert code == 0
    assert json.loads(capsys.readouterr().out)["transform"]["scale"] == 0.5

# -----------------------------------------------------------------------------
# BAD INPUT
# -----------------------------------------------------------------------------

def test_missing_input_returns_2(capsys) -> None:
    assert main(["--repo", "org/repo", "--use-defaults"]) == 2
    assert "ERROR" in capsys.readouterr().err


def test_nonexistent_input_returns_2(tmp_path: Path) -> None:
    assert main(["-i", str(tmp_path / "nope.json"), "--repo", "org/repo", "--use-defaults"]) == 2


def test_bad_repo_name_returns_2(listing_file: Path) -> None:
    assert main(["-i", str(listing_file), "--repo", "justrepo", "--use-defaults"]) == 2


def test_bad_viewport_returns_2(listing_file: Path) -> None:
    assert _run(listing_file, "--width", "0") == 2


def test_malformed_listing_returns_2(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text('{"tree": "nope"}', encoding="utf-8")
    assert main(["-i", str(path), "--repo", "org/repo", "--use-defaults"]) == 2
