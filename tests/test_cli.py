import io
import json
from contextlib import redirect_stdout

import gpxpy.geo
import pytest

from odometer.analysis.config import MileageConfig, OutputFormat
from odometer.cli import list_track_files, main, report
from odometer.utils.timeutils import parse_instant
from odometer.utils.geo import METERS_PER_MILE

NOW_ARG = "2024-01-10T00:00:00Z"


@pytest.fixture
def track_dir(write_gpx, tmp_path):
    write_gpx(
        "commute.gpx",
        [(45.0, 7.0, "2024-01-08T10:00:00Z"), (45.01, 7.0, "2024-01-08T11:00:00Z")],
    )
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
    (tmp_path / "corrupt.gpx").write_text("<gpx", encoding="utf-8")
    return tmp_path


def test_no_arguments_prints_usage(capsys):
    assert main([]) is None
    out = capsys.readouterr().out
    assert out.startswith("usage: odometer")


def test_too_many_arguments_prints_usage(capsys, tmp_path):
    main([str(tmp_path), str(tmp_path)])
    assert capsys.readouterr().out.startswith("usage: odometer")


def test_bad_now_prints_usage(capsys, tmp_path):
    main(["--now", "soon", str(tmp_path)])
    assert capsys.readouterr().out.startswith("usage: odometer")


def test_missing_directory_prints_error(capsys, tmp_path):
    missing = tmp_path / "nope"
    main(["--format", "csv", str(missing)])
    out = capsys.readouterr().out
    assert "No such file or directory" in out
    assert "time,mileage_in_past_month" not in out


def test_list_track_files(track_dir):
    assert [p.name for p in list_track_files(track_dir)] == ["commute.gpx", "corrupt.gpx"]


def test_csv_report(capsys, track_dir):
    main(["--format", "csv", "--now", NOW_ARG, str(track_dir)])
    lines = capsys.readouterr().out.splitlines()

    assert lines[0] == "time,mileage_in_past_month"
    assert len(lines) == 1 + 365
    assert lines[1] == "2023-01-10T00:00:00Z,0.000000"

    miles = gpxpy.geo.distance(45.0, 7.0, None, 45.01, 7.0, None) / METERS_PER_MILE
    assert lines[-3] == "2024-01-07T00:00:00Z,0.000000"
    assert lines[-2] == f"2024-01-08T00:00:00Z,{miles:f}"
    assert lines[-1] == f"2024-01-09T00:00:00Z,{miles:f}"


def test_now_is_rounded_to_granularity(capsys, track_dir):
    main(["--format", "csv", "--now", "2024-01-09T20:00:00Z", str(track_dir)])
    lines = capsys.readouterr().out.splitlines()
    assert lines[-1].startswith("2024-01-09T00:00:00Z,")


def test_hourly_preset(capsys, track_dir):
    main(["--format", "csv", "--preset", "hourly", "--now", NOW_ARG, str(track_dir)])
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 1 + 365 * 24
    assert lines[-1].startswith("2024-01-09T23:00:00Z,")


def test_chart_report_is_default(capsys, track_dir):
    main(["--now", NOW_ARG, str(track_dir)])
    out = capsys.readouterr().out
    assert out.lstrip().lower().startswith("<html")
    assert "Mileage" in out


def test_json_log_file(capsys, track_dir, tmp_path):
    log_path = tmp_path / "run.log"
    main(["--format", "csv", "--now", NOW_ARG, "--log-json", str(log_path), str(track_dir)])
    capsys.readouterr()

    records = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]
    messages = [r["message"] for r in records]
    assert any(m.startswith("Skipping unreadable track file") for m in messages)
    assert "Skipped 1 of 2 track files" in messages
    assert {"timestamp", "level", "logger", "message"} <= set(records[0])


def test_version(capsys):
    main(["--version"])
    assert capsys.readouterr().out.startswith("odometer ")


def test_report_follows_redirected_stdout(track_dir):
    buf = io.StringIO()
    with redirect_stdout(buf):
        main(["--format", "csv", "--now", NOW_ARG, str(track_dir)])
    assert buf.getvalue().startswith("time,mileage_in_past_month\n")


def test_report_to_explicit_stream(capsys, track_dir):
    buf = io.StringIO()
    report(track_dir, OutputFormat.CSV, MileageConfig.daily(), parse_instant(NOW_ARG), stream=buf)
    assert buf.getvalue().splitlines()[0] == "time,mileage_in_past_month"
    assert "time,mileage_in_past_month" not in capsys.readouterr().out


def test_unwritable_json_log_prints_error(capsys, track_dir, tmp_path):
    # a directory cannot be opened as a log file
    main(["--format", "csv", "--now", NOW_ARG, "--log-json", str(tmp_path), str(track_dir)])
    out = capsys.readouterr().out
    assert out.strip()
    assert "time,mileage_in_past_month" not in out
