import logging

import pytest

pytest.importorskip("pygame")

from astargrid.app import viewer  # noqa: E402
from astargrid.core.types import Grid  # noqa: E402


def test_try_load_map_logs_malformed_file(tmp_path, caplog):
    path = tmp_path / "bad.json"
    path.write_text('{"rows": "x", "cols": 2, "cells": []}')
    with caplog.at_level(logging.ERROR, logger="astargrid"):
        assert viewer.try_load_map(path) is None
    assert "Failed to load map" in caplog.text


def test_try_load_map_logs_missing_file(tmp_path, caplog):
    with caplog.at_level(logging.ERROR, logger="astargrid"):
        assert viewer.try_load_map(tmp_path / "nope.json") is None
    assert "Failed to load map" in caplog.text


def test_try_save_map_logs_unwritable_target(tmp_path, caplog):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    with caplog.at_level(logging.ERROR, logger="astargrid"):
        assert not viewer.try_save_map(Grid.empty(2, 2), blocker / "custom.json")
    assert "Failed to save grid" in caplog.text


def test_try_save_map_writes(tmp_path):
    target = tmp_path / "custom.json"
    assert viewer.try_save_map(Grid.empty(2, 2), target)
    assert target.exists()


@pytest.mark.parametrize("argv", [["--rows=abc"], ["--cols=0"]])
def test_main_exits_on_bad_settings(argv):
    with pytest.raises(SystemExit) as exc:
        viewer.main(argv)
    assert exc.value.code == 2


def test_main_exits_on_bad_map(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[1, 2, 3]")
    with pytest.raises(SystemExit) as exc:
        viewer.main([f"--map={path}"])
    assert exc.value.code == 1
