# unicorn_attack/tests/level_tests.py
"""
Level loader and generator tests.

Usage (from repo root):
  python -m unicorn_attack.tests.level_tests
"""
from __future__ import annotations
import dataclasses
import io
import tempfile
from pathlib import Path

from unicorn_attack.game.config import SPAWN_X, SPAWN_Y
from unicorn_attack.game.level import (
    Level, Platform, LevelFormatError, parse_level, load_level, write_level,
)
from unicorn_attack.game.levelgen import generate_level
from unicorn_attack.game.simulation import Simulation

REPO_ROOT = Path(__file__).resolve().parents[2]
LVL1 = REPO_ROOT / "levels" / "lvl1.txt"


def test_parse_keeps_order_and_skips_comments():
    src = io.StringIO("# header\n0 1 4 1\n\n  10.5 -2 3 0.5  \n# done\n")
    level = parse_level(src)
    assert level.platform_count == 2 == len(level)
    assert level[0] == Platform(0.0, 1.0, 4.0, 1.0)
    assert level[1] == Platform(10.5, -2.0, 3.0, 0.5)


def test_empty_source_is_an_empty_level():
    level = parse_level(io.StringIO(""))
    assert level.platform_count == 0
    assert list(level) == []


def test_malformed_lines_raise_with_line_number():
    for bad in ("0 1 4\n", "0 1 4 1 9\n", "0 one 4 1\n"):
        try:
            parse_level(io.StringIO("0 0 1 1\n" + bad), source="bad.txt")
        except LevelFormatError as e:
            assert e.line_no == 2 and e.source == "bad.txt"
            assert isinstance(e, ValueError)
        else:
            raise AssertionError(f"expected LevelFormatError for {bad!r}")


def test_load_missing_file():
    try:
        load_level("does/not/exist.txt")
    except FileNotFoundError:
        return
    raise AssertionError("expected FileNotFoundError")


def test_platforms_and_level_are_immutable():
    p = Platform(0.0, 1.0, 2.0, 1.0)
    try:
        p.x = 5.0
    except dataclasses.FrozenInstanceError:
        pass
    else:
        raise AssertionError("Platform must be frozen")
    level = Level([p])
    assert isinstance(level.platforms, tuple)


def test_write_then_load(tmp_path: Path):
    level = Level([Platform(-2.0, 1.0, 18.0, 1.0), Platform(46.0, 4.0, 2.0, 3.0)])
    path = write_level(level, tmp_path / "out" / "lvl.txt")
    assert load_level(path) == level


def test_bundled_level_is_playable():
    level = load_level(LVL1)
    assert level.platform_count > 10
    sim = Simulation(level)
    for _ in range(60):
        sim.update(1 / 60)
    assert not sim.ended
    assert sim.rider.y == level[0].y + 1, "rider should rest on the start platform"


def test_generator_is_deterministic_per_seed():
    a, seed_a = generate_level(123, length=200.0)
    b, seed_b = generate_level(123, length=200.0)
    c, _ = generate_level(124, length=200.0)
    assert seed_a == seed_b == 123
    assert a == b
    assert a != c


def test_generator_random_seed_is_reported():
    level, seed = generate_level(None, length=50.0)
    again, _ = generate_level(seed, length=50.0)
    assert level == again


def test_generated_start_is_safe():
    level, _ = generate_level(7, length=200.0)
    start = level[0]
    assert start.x <= SPAWN_X and start.right >= SPAWN_X + 2
    assert start.y < SPAWN_Y
    right = max(p.right for p in level)
    assert right >= 200.0
    sim = Simulation(level)
    for _ in range(60):
        sim.update(1 / 60)
    assert not sim.ended and sim.rider.y == start.y + 1


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
    print("🎉 All level tests passed")


if __name__ == "__main__":
    main()
