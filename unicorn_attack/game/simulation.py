# unicorn_attack/game/simulation.py
from __future__ import annotations
import logging
from enum import Enum
from typing import NamedTuple, Optional, Tuple

from .config import (
    GRAVITY, BASE_SPEED, RIDER_W, RIDER_H, SPAWN_X, SPAWN_Y,
    RISE_SPEED, MANUAL_STEP, MAX_MANUAL_SPEED,
    BOOST_DURATION, BOOST_SPEED_MULT, BOOST_DECAY_PER_TICK,
)
from .level import Level, Platform
from .rider import Rider

logger = logging.getLogger(__name__)


class ControlMode(Enum):
    AUTO = "auto"       # dx follows elapsed time
    MANUAL = "manual"   # dx follows left/right intents


class BoostDecay(Enum):
    PER_TICK = "tick"       # fixed amount per update call (frame-rate dependent)
    PER_SECOND = "second"   # scaled by timestep


class Intent(Enum):
    RISE = "rise"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    TOGGLE_MODE = "toggle_mode"
    BOOST = "boost"
    RESTART = "restart"
    QUIT = "quit"


class Contact(Enum):
    NONE = 0
    LANDING = 1
    FATAL = 2


class HudFields(NamedTuple):
    x: float
    y: float
    dx: float
    dy: float
    boost: float


def overlaps(rider: Rider, p: Platform) -> bool:
    """Broad phase: rider box vs platform box, touching edges count as overlap."""
    return not (
        p.x > rider.right
        or p.y < rider.bottom
        or p.right < rider.x
        or p.bottom > rider.y
    )


def classify(rider: Rider, p: Platform) -> Contact:
    """Diagonal heuristic: close enough to the top-left diagonal means a landing."""
    if not overlaps(rider, p):
        return Contact.NONE
    if (rider.y + rider.x) - (p.y + p.x) >= 1 - RIDER_W:
        return Contact.LANDING
    return Contact.FATAL


class Simulation:
    """
    Rider vs Level state machine (RUNNING -> ENDED on a fatal contact,
    back to RUNNING only through restart()).
    """

    def __init__(self,
                 level: Level,
                 control_mode: ControlMode = ControlMode.AUTO,
                 boost_decay: BoostDecay = BoostDecay.PER_TICK,
                 spawn: Tuple[float, float] = (SPAWN_X, SPAWN_Y)):
        self.level = level
        self.spawn = (float(spawn[0]), float(spawn[1]))
        self.rider = Rider(x=self.spawn[0], y=self.spawn[1])
        self.time: float = 0.0
        self.ended: bool = False
        self.control_mode = control_mode
        self.boost_decay = boost_decay
        # platform that killed the rider, for the game-over panel
        self.crash_platform: Optional[Platform] = None

    # -------------------- Tick --------------------

    def update(self, timestep: float):
        if timestep < 0:
            raise ValueError(f"timestep must be >= 0, got {timestep}")
        if self.ended:
            return

        r = self.rider
        self.time += timestep

        # Symplectic Euler: position uses last tick's velocity
        r.x += timestep * r.dx
        r.y += timestep * r.dy

        if not r.boosting:
            r.dy -= GRAVITY * timestep

        if self.control_mode is ControlMode.AUTO:
            r.dx = BASE_SPEED + self.time

        if r.boosting:
            r.dx *= BOOST_SPEED_MULT
            if self.boost_decay is BoostDecay.PER_SECOND:
                r.boost_remaining -= timestep
            else:
                r.boost_remaining -= BOOST_DECAY_PER_TICK
        if r.boost_remaining < 0.0:
            r.boost_remaining = 0.0

        self.resolve_collisions()

    def resolve_collisions(self) -> Contact:
        """
        The rider first lands on the highest landing top among the overlapping
        platforms (first in level order on equal tops), then every overlap is
        re-checked from that height. A contact that is still fatal ends the
        session and the rider keeps its pre-collision position.
        """
        r = self.rider
        landing: Optional[Platform] = None
        for p in self.level:
            if classify(r, p) is Contact.LANDING and (landing is None or p.y > landing.y):
                landing = p

        before = (r.y, r.dy)
        if landing is not None:
            r.y = landing.y + RIDER_H
            r.dy = 0.0

        for p in self.level:
            if classify(r, p) is Contact.FATAL:
                r.y, r.dy = before
                self.ended = True
                self.crash_platform = p
                logger.info("Crashed into platform %s at t=%.2f (x=%.2f, y=%.2f)",
                            p, self.time, r.x, r.y)
                return Contact.FATAL

        if landing is None:
            return Contact.NONE
        logger.debug("Landed on %s", landing)
        return Contact.LANDING

    # -------------------- Intents --------------------

    def rise(self):
        self.rider.dy = RISE_SPEED

    def toggle_control_mode(self):
        if self.control_mode is ControlMode.AUTO:
            self.control_mode = ControlMode.MANUAL
        else:
            self.control_mode = ControlMode.AUTO
        self.rider.dx = 0.0
        logger.info("Control mode -> %s", self.control_mode.value)

    def move_left(self):
        self._nudge(-MANUAL_STEP)

    def move_right(self):
        self._nudge(+MANUAL_STEP)

    def _nudge(self, delta: float):
        if self.control_mode is not ControlMode.MANUAL:
            return
        dx = self.rider.dx + delta
        self.rider.dx = max(-MAX_MANUAL_SPEED, min(MAX_MANUAL_SPEED, dx))

    def start_boost(self):
        self.rider.boost_remaining = BOOST_DURATION

    def restart(self):
        self.time = 0.0
        self.rider.respawn(*self.spawn)
        self.ended = False
        self.crash_platform = None
        logger.info("Restarted")

    def apply(self, intent: Intent):
        handler = {
            Intent.RISE: self.rise,
            Intent.MOVE_LEFT: self.move_left,
            Intent.MOVE_RIGHT: self.move_right,
            Intent.TOGGLE_MODE: self.toggle_control_mode,
            Intent.BOOST: self.start_boost,
            Intent.RESTART: self.restart,
        }.get(intent)
        if handler is None:
            raise ValueError(f"Intent {intent!r} is not handled by the simulation")
        handler()

    # -------------------- Display --------------------

    def hud(self) -> HudFields:
        r = self.rider
        return HudFields(r.x, r.y, r.dx, r.dy, r.boost_remaining)
