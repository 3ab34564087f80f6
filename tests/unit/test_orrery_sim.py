import json

import pytest

pytest.importorskip("pygame")
pytest.importorskip("dearpygui.dearpygui")

import orrery_sim  # noqa: E402
from orrery.kinematics import TransformUpdater  # noqa: E402
from orrery.presets_loader import default_hierarchy  # noqa: E402


def test_parse_args_defaults():
    args = orrery_sim.parse_args([])
    assert args.preset is None
    assert args.orbit_stepping == "per_tick"
    assert args.fps == 60
    assert not args.no_panel


def test_run_headless_reports_every_body():
    system = default_hierarchy()
    lines = orrery_sim.run_headless(system, TransformUpdater(), ticks=100, fps=60)

    assert len(lines) == 8
    assert lines[0].startswith("Sun")
    assert system.find("Mercury").rotation_angle == pytest.approx(1.0)


def test_main_headless_prints_positions(capsys):
    assert orrery_sim.main(["--headless-ticks", "10", "--log-level", "WARNING"]) == 0
    out = capsys.readouterr().out
    assert "Earth/Moon" in out
    assert "Mars/Deimos" in out


def test_main_rejects_bad_preset(tmp_path):
    preset = tmp_path / "broken.json"
    preset.write_text(json.dumps({"planets": [{"name": "X"}]}), encoding="utf-8")

    assert orrery_sim.main(["--preset", str(preset), "--headless-ticks", "1"]) == 1


def test_main_closes_viewport_when_panel_fails(monkeypatch):
    closed = []

    class FakeViewport:
        def __init__(self, *args, **kwargs):
            pass

        def limit_frame_rate(self):
            pass

        def close(self):
            closed.append("viewport")

    def broken_panel(*args, **kwargs):
        raise RuntimeError("no display")

    monkeypatch.setattr(orrery_sim, "PygameRenderer", FakeViewport)
    monkeypatch.setattr(orrery_sim, "DiagnosticsPanel", broken_panel)

    with pytest.raises(RuntimeError, match="no display"):
        orrery_sim.main(["--log-level", "WARNING"])
    assert closed == ["viewport"]
