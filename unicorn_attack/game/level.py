# unicorn_attack/game/level.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Iterable, Iterator, Tuple, Union

logger = logging.getLogger(__name__)


class LevelFormatError(ValueError):
    """A level source line that is not four numbers."""

    def __init__(self, source: str, line_no: int, line: str):
        super().__init__(f"{source}:{line_no}: expected 'x y w h', got {line.strip()!r}")
        self.source = source
        self.line_no = line_no
        self.line = line


@dataclass(frozen=True)
class Platform:
    """
    Axis-aligned block in standardized units.
    (x, y) is the left edge / TOP edge; the block spans [x, x+w] x [y-h, y].
    """
    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y - self.h


class Level:
    """Ordered, immutable set of platforms. Order decides collision evaluation order."""

    def __init__(self, platforms: Iterable[Platform]):
        self._platforms: Tuple[Platform, ...] = tuple(platforms)
        self.platform_count = len(self._platforms)

    @property
    def platforms(self) -> Tuple[Platform, ...]:
        return self._platforms

    def __iter__(self) -> Iterator[Platform]:
        return iter(self._platforms)

    def __len__(self) -> int:
        return self.platform_count

    def __getitem__(self, i: int) -> Platform:
        return self._platforms[i]

    def __eq__(self, other) -> bool:
        return isinstance(other, Level) and self._platforms == other._platforms

    def __repr__(self) -> str:
        return f"Level(platform_count={self.platform_count})"


def parse_level(lines: Iterable[str], source: str = "<stream>") -> Level:
    """Parse 'x y w h' lines. Blank lines and '#' comments are skipped."""
    platforms = []
    for line_no, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        fields = stripped.split()
        if len(fields) != 4:
            raise LevelFormatError(source, line_no, line)
        try:
            x, y, w, h = (float(f) for f in fields)
        except ValueError:
            raise LevelFormatError(source, line_no, line) from None
        platforms.append(Platform(x, y, w, h))
    return Level(platforms)


def load_level(src: Union[str, Path, IO[str]]) -> Level:
    """Read a level from a path or an open text stream."""
    if hasattr(src, "read"):
        level = parse_level(src, source=getattr(src, "name", "<stream>"))
    else:
        path = Path(src)
        if not path.exists():
            raise FileNotFoundError(f"Level file not found: {path}")
        with path.open("r", encoding="utf-8") as f:
            level = parse_level(f, source=str(path))
    logger.info("Loaded level with %d platforms", level.platform_count)
    return level


def write_level(level: Level, dst: Union[str, Path]) -> Path:
    path = Path(dst)
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [f"{p.x:g} {p.y:g} {p.w:g} {p.h:g}" for p in level]
    path.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")
    return path
