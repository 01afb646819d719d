from __future__ import annotations

import json
from pathlib import Path

from sumstack.constants import HIGH_SCORE_KEY
from sumstack.events.bus import EVENT_NEW_HIGH_SCORE, EventBus
from sumstack.systems.high_score_system import HighScoreSystem
from sumstack.utils.game_state import get_round_state
from sumstack.world import create_world
from tests.helpers import bottom_row, build_round


def _system(save_path: Path):
    bus = EventBus()
    world = create_world(bus)
    return bus, world, HighScoreSystem(world, bus, save_path=save_path)


def test_missing_file_starts_at_zero(tmp_path) -> None:
    _, world, system = _system(Path(tmp_path) / "high_score.json")
    assert system.high_score == 0
    assert get_round_state(world).high_score == 0


def test_stored_value_is_loaded_into_round_state(tmp_path) -> None:
    save_path = Path(tmp_path) / "high_score.json"
    save_path.write_text(json.dumps({HIGH_SCORE_KEY: 120}), encoding="utf-8")
    _, world, system = _system(save_path)
    assert system.high_score == 120
    assert get_round_state(world).high_score == 120


def test_malformed_file_is_treated_as_zero(tmp_path) -> None:
    save_path = Path(tmp_path) / "high_score.json"
    save_path.write_text("{not json", encoding="utf-8")
    _, _, system = _system(save_path)
    assert system.high_score == 0

    save_path.write_text(json.dumps({HIGH_SCORE_KEY: "lots"}), encoding="utf-8")
    assert system.load() == 0


def test_new_high_score_is_written(tmp_path) -> None:
    save_path = Path(tmp_path) / "nested" / "high_score.json"
    bus, _, system = _system(save_path)

    bus.emit(EVENT_NEW_HIGH_SCORE, value=70)

    with save_path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    assert payload == {HIGH_SCORE_KEY: 70}
    assert system.high_score == 70


def test_lower_value_does_not_overwrite(tmp_path) -> None:
    save_path = Path(tmp_path) / "high_score.json"
    save_path.write_text(json.dumps({HIGH_SCORE_KEY: 90}), encoding="utf-8")
    bus, _, system = _system(save_path)

    bus.emit(EVENT_NEW_HIGH_SCORE, value=50)

    assert json.loads(save_path.read_text(encoding="utf-8")) == {HIGH_SCORE_KEY: 90}
    assert system.high_score == 90


def test_data_dir_from_environment(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("SUMSTACK_DATA_DIR", str(tmp_path))
    bus = EventBus()
    system = HighScoreSystem(create_world(bus), bus)
    assert system.save_path == Path(tmp_path) / "high_score.json"


def test_round_persists_best_score(tmp_path) -> None:
    save_path = Path(tmp_path) / "high_score.json"
    h = build_round()
    HighScoreSystem(h.world, h.bus, save_path=save_path)
    h.rounds.start("classic")
    a, b = bottom_row(h.world, [6, 4])
    h.matcher.target.value = 10
    h.rounds.toggle_tile(a)
    h.rounds.toggle_tile(b)

    assert json.loads(save_path.read_text(encoding="utf-8")) == {HIGH_SCORE_KEY: 20}
