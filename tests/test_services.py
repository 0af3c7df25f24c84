from __future__ import annotations

import json
from pathlib import Path

import pytest

from kickoff.api import GameService, ServiceContext, ServiceError
from kickoff.core.config import EngineConfig
from kickoff.tools import cli


def _make_service(tmp_path: Path, **overrides) -> GameService:
    cfg = EngineConfig(seed=7, **overrides)
    ctx = ServiceContext.from_paths(tmp_path, tmp_path / "career.json", config=cfg)
    service = GameService(ctx)
    service.create({"teams": 4, "season": 2025})
    return service


def test_create_writes_save_file(tmp_path: Path) -> None:
    service = _make_service(tmp_path)
    assert (tmp_path / "career.json").exists()
    reloaded = GameService(service.context)
    assert reloaded.state.player_team_id == service.state.player_team_id
    assert len(reloaded.table()) == 4


def test_missing_save_raises_service_error(tmp_path: Path) -> None:
    ctx = ServiceContext.from_paths(tmp_path, tmp_path / "nope.json", config=EngineConfig())
    with pytest.raises(ServiceError):
        GameService(ctx).news()


def test_live_clock_runs_match_to_full_time(tmp_path: Path) -> None:
    service = _make_service(tmp_path)
    result = service.advance(7)
    assert result["live_match"] is not None
    match_id = result["live_match"]["match_id"]

    with pytest.raises(ServiceError):
        service.advance(1)

    sleeps: list[float] = []
    minutes: list[int] = []
    summary = service.run_live_match(sleep=sleeps.append, on_tick=lambda live: minutes.append(live.minute))

    assert summary["id"] == match_id
    assert summary["status"] == "played"
    assert minutes == list(range(1, 91))
    assert len(sleeps) == 89
    assert all(s == pytest.approx(0.5) for s in sleeps)
    assert service.state.live_match is None
    assert sum(row["p"] for row in service.table()) == 2

    service.advance(0)
    assert sum(row["p"] for row in service.table()) == 4


def test_live_clock_stops_when_paused(tmp_path: Path) -> None:
    service = _make_service(tmp_path, live_minutes_per_second=4.0)
    service.start_live()

    calls: list[float] = []

    def _pause_after_ten(live) -> None:
        if live.minute == 10:
            service.pause_live()

    view = service.run_live_match(sleep=calls.append, on_tick=_pause_after_ten)
    assert view["status"] == "paused"
    assert view["minute"] == 10
    assert all(s == pytest.approx(0.25) for s in calls)


def test_live_commands_require_a_live_match(tmp_path: Path) -> None:
    service = _make_service(tmp_path)
    for op in (service.tick_live, service.pause_live, service.resume_live, service.end_live):
        with pytest.raises(ServiceError):
            op()
    with pytest.raises(ServiceError):
        service.start_live("saknas")


def test_next_match_and_training(tmp_path: Path) -> None:
    service = _make_service(tmp_path)
    nxt = service.next_match()
    assert nxt["days"] == 7
    assert nxt["match"]["status"] == "scheduled"
    trained = service.train()
    assert trained["players_changed"] > 0


def test_autosave_resets_counter(tmp_path: Path) -> None:
    service = _make_service(tmp_path, autosave_interval=2)
    service.advance(3)
    assert service.state.autosave_counter == 0
    on_disk = json.loads((tmp_path / "career.json").read_text(encoding="utf-8"))
    assert on_disk["current_date"] == "2025-03-04"
    assert on_disk["autosave_counter"] == 0


def test_cli_reports_service_errors(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = cli.main(["--saves", str(tmp_path), "--file", str(tmp_path / "missing.json"), "table"])
    out = json.loads(capsys.readouterr().out)
    assert code == 1
    assert out["ok"] is False
    assert out["error"]["code"] == "SERVICE_ERROR"


def test_cli_new_advance_and_table(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    save = str(tmp_path / "career.json")
    assert cli.main(["--saves", str(tmp_path), "--file", save, "new", "--teams", "4", "--seed", "5"]) == 0
    created = json.loads(capsys.readouterr().out)
    assert created["teams"] == 4

    assert cli.main(["--saves", str(tmp_path), "--file", save, "next"]) == 0
    assert json.loads(capsys.readouterr().out)["days"] == 7

    assert cli.main(["--saves", str(tmp_path), "--file", save, "advance", "--days", "7"]) == 0
    advanced = json.loads(capsys.readouterr().out)
    assert advanced["live_match"]["minute"] == 0

    assert cli.main(["--saves", str(tmp_path), "--file", save, "live", "play", "--fast"]) == 0
    played = json.loads(capsys.readouterr().out)
    assert played["status"] == "played"

    assert cli.main(["--saves", str(tmp_path), "--file", save, "advance", "--days", "0"]) == 0
    capsys.readouterr()

    assert cli.main(["--saves", str(tmp_path), "--file", save, "table"]) == 0
    rows = json.loads(capsys.readouterr().out)
    assert [r["pos"] for r in rows] == [1, 2, 3, 4]
    assert sum(r["p"] for r in rows) == 4
