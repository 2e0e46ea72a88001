# unicorn_attack/tests/game_tests.py
"""
Input mapping and game-loop glue.

Usage (from repo root):
  python -m unicorn_attack.tests.game_tests
"""
from __future__ import annotations
import tempfile
from pathlib import Path

import pygame

from unicorn_attack.game.controls import intent_for_event
from unicorn_attack.game.game import parse_args, build_simulation, FpsCounter
from unicorn_attack.game.render import hud_line
from unicorn_attack.game.simulation import Intent, ControlMode, BoostDecay, Simulation
from unicorn_attack.game.level import Level, load_level

LVL1 = Path(__file__).resolve().parents[2] / "levels" / "lvl1.txt"


def test_key_down_maps_to_intents():
    expected = {
        pygame.K_UP: Intent.RISE,
        pygame.K_LEFT: Intent.MOVE_LEFT,
        pygame.K_RIGHT: Intent.MOVE_RIGHT,
        pygame.K_d: Intent.TOGGLE_MODE,
        pygame.K_x: Intent.BOOST,
        pygame.K_n: Intent.RESTART,
        pygame.K_ESCAPE: Intent.QUIT,
    }
    for key, intent in expected.items():
        assert intent_for_event(pygame.event.Event(pygame.KEYDOWN, key=key)) is intent


def test_other_events_are_ignored():
    assert intent_for_event(pygame.event.Event(pygame.KEYUP, key=pygame.K_UP)) is None
    assert intent_for_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_q)) is None
    assert intent_for_event(pygame.event.Event(pygame.QUIT)) is Intent.QUIT


def test_build_simulation_from_level_file():
    sim = build_simulation(parse_args(["--level", str(LVL1)]))
    assert sim.level.platform_count > 0
    assert sim.control_mode is ControlMode.AUTO
    assert sim.boost_decay is BoostDecay.PER_TICK


def test_build_simulation_from_seed():
    args = parse_args(["--seed", "7", "--mode", "manual", "--boost-decay", "second"])
    sim = build_simulation(args)
    again = build_simulation(args)
    assert sim.level == again.level
    assert sim.control_mode is ControlMode.MANUAL
    assert sim.boost_decay is BoostDecay.PER_SECOND


def test_generated_level_can_be_saved(tmp_path: Path):
    out = tmp_path / "gen" / "seed7.txt"
    sim = build_simulation(parse_args(["--seed", "7", "--save-level", str(out)]))
    assert load_level(out) == sim.level
    # the saved file replays as the same track
    again = build_simulation(parse_args(["--level", str(out)]))
    assert again.level == sim.level


def test_fps_counter_counts_half_second_windows():
    fps = FpsCounter()
    assert fps.tick(0.2) == 0.0
    assert fps.tick(0.2) == 0.0
    assert fps.tick(0.2) == 6.0


def test_hud_line_fields():
    sim = Simulation(Level([]))
    sim.start_boost()
    line = hud_line(sim, 60.0)
    assert line == "position(0.00, 3.00) speed(0.00, 0.00) dash: 1.00 fps: 60"


def main():
    with tempfile.TemporaryDirectory() as d:
        for name, fn in list(globals().items()):
            if not (name.startswith("test_") and callable(fn)):
                continue
            if "tmp_path" in fn.__code__.co_varnames[:fn.__code__.co_argcount]:
                fn(Path(d))
            else:
                fn()
            print(f"✓ {name}")
    print("🎉 All game tests passed")


if __name__ == "__main__":
    main()
