from __future__ import annotations

import argparse
from datetime import datetime, timezone
from pathlib import Path

import pytest

from maplog.cli.main import _parse_origin, build_config, build_parser, main
from maplog.workout.model import Cycling, Running
from maplog.workout.serialization import dump_workouts
from maplog.workout.storage import FileStorage


def _seed(data_dir: Path) -> None:
    created = datetime(2026, 4, 14, 9, 30, tzinfo=timezone.utc)
    run = Running(
        (51.5, -0.1), 5.2, 24, cadence_spm=178, id="1700000000000", created_at=created
    )
    ride = Cycling(
        (51.6, -0.2), 27, 95, elevation_gain_m=420, id="1700000000500", created_at=created
    )
    FileStorage(data_dir).set_item("workouts", dump_workouts([run, ride]))


def test_list_prints_stored_workouts(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    _seed(tmp_path)

    assert main(["--list", "--data-dir", str(tmp_path)]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("1700000000000")
    assert "Running on April 14" in lines[0]
    assert "4.6 min/km" in lines[0]
    assert "17.1 km/h" in lines[1]


def test_list_handles_unreadable_blob(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    FileStorage(tmp_path).set_item("workouts", "{oops")

    assert main(["--list", "--data-dir", str(tmp_path)]) == 1
    assert "unreadable" in capsys.readouterr().out


def test_reset_clears_storage(tmp_path: Path) -> None:
    _seed(tmp_path)

    assert main(["--reset", "--data-dir", str(tmp_path)]) == 0
    assert FileStorage(tmp_path).get_item("workouts") is None


def test_no_action_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_parse_origin_and_config(tmp_path: Path) -> None:
    assert _parse_origin("51.5,-0.1") == (51.5, -0.1)
    with pytest.raises(argparse.ArgumentTypeError):
        _parse_origin("north")

    args = build_parser().parse_args(
        ["--web", "--zoom", "15", "--geo-timeout", "0", "--data-dir", str(tmp_path)]
    )
    config = build_config(args)

    assert config.map_zoom_level == 15
    assert config.geolocation_timeout_sec == 1.0
    assert config.data_dir == tmp_path
