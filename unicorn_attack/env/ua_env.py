# unicorn_attack/env/ua_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from unicorn_attack.game.config import (
    SCREEN_WIDTH, SCREEN_HEIGHT, FALL_LIMIT_Y, LEVEL_LENGTH,
)
from unicorn_attack.game.level import Level
from unicorn_attack.game.levelgen import generate_level
from unicorn_attack.game.render import draw_frame
from unicorn_attack.game.simulation import Simulation, ControlMode, BoostDecay
from unicorn_attack.env.observations import build_observation, OBS_LOW, OBS_HIGH

ACTION_NOOP, ACTION_RISE, ACTION_BOOST = 0, 1, 2
ACTION_NAMES = ("NOOP", "RISE", "BOOST")
DEATH_PENALTY = -10.0


class UnicornEnv(gym.Env):
    """
    Unicorn Attack Gymnasium environment (vector observations).
    - Simulation at 60 Hz (internal), AUTO control mode.
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec.
    - Observation: shape (15,), float32 (see observations.build_observation).
    - Fixed level if `level` is given, else a generated one per reset(seed).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 30.0,
                 level: Optional[Level] = None,
                 level_length: float = LEVEL_LENGTH,
                 boost_decay: BoostDecay = BoostDecay.PER_TICK):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.fixed_level = level
        self.level_length = float(level_length)
        self.boost_decay = boost_decay

        self.sim_fps = 60
        self.dt = 1.0 / self.sim_fps

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = RISE, 2 = BOOST
        self.action_space = gym.spaces.Discrete(3)
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        # --- Runtime state ---
        self.sim: Optional[Simulation] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None
        self.death_cause: Optional[str] = None   # "crash" | "fell" | None

        # Rendering
        self.screen = None
        self.clock = None
        self.font = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        if self.fixed_level is not None:
            level = self.fixed_level
            self.current_seed = seed
        else:
            # explicit seed -> same layout; otherwise draw from the env RNG
            level_seed = int(seed) if seed is not None else int(self.np_random.integers(0, 2**31 - 1))
            level, self.current_seed = generate_level(level_seed, self.level_length)

        self.sim = Simulation(level, control_mode=ControlMode.AUTO, boost_decay=self.boost_decay)
        self.timestep = 0
        self.death_cause = None

        obs = self._get_obs()
        info = {"seed": self.current_seed, "distance": 0.0}
        return obs, info

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.sim is not None, "Call reset() first."
        sim = self.sim

        if action == ACTION_RISE:
            sim.rise()
        elif action == ACTION_BOOST:
            sim.start_boost()

        x_before = sim.rider.x
        for _ in range(self.frame_skip):
            sim.update(self.dt)
            if sim.ended:
                self.death_cause = "crash"
            elif sim.rider.y < FALL_LIMIT_Y:
                self.death_cause = "fell"
            if self.death_cause is not None:
                break

        terminated = self.death_cause is not None
        reward = float(sim.rider.x - x_before)
        if terminated:
            reward += DEATH_PENALTY

        self.timestep += 1
        truncated = (self.time_limit_decisions is not None
                     and self.timestep >= self.time_limit_decisions)

        info = {
            "distance": float(sim.rider.x - sim.spawn[0]),
            "time": float(sim.time),
            "timestep": self.timestep,
            "seed": self.current_seed,
            "boost": float(sim.rider.boost_remaining),
            "death_cause": self.death_cause,
        }

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, bool(truncated), info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.sim is not None
        return build_observation(self.sim.rider, self.sim.level.platforms)

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.sim is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
                pygame.display.set_caption("Unicorn Attack - Gym Env")
            else:
                self.screen = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT))
            self.clock = pygame.time.Clock()
            self.font = pygame.font.SysFont("jetbrainsmono", 14)

        draw_frame(self.screen, self.sim, self.font, self.metadata["render_fps"])

        if self.render_mode == "human":
            # keep the OS from flagging the window as hung
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.font = None
