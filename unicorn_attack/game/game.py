import sys, argparse, logging
import pygame
from .config import (
    SCREEN_WIDTH, SCREEN_HEIGHT, FPS, WINDOW_TITLE, MAX_TIMESTEP, FPS_WINDOW_S,
    LEVEL_DEFAULT,
)
from .controls import intent_for_event, HELP_TEXT
from .level import LevelFormatError, load_level, write_level
from .levelgen import generate_level
from .render import draw_frame
from .simulation import Simulation, ControlMode, BoostDecay, Intent

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    p = argparse.ArgumentParser(prog="unicorn-attack", description="Unicorn Attack endless runner")
    p.add_argument("--level", type=str, default=LEVEL_DEFAULT,
                   help="Level file with one 'x y w h' platform per line.")
    p.add_argument("--seed", type=int, default=None,
                   help="Generate the level from this seed instead of loading --level; -1 = random.")
    p.add_argument("--mode", choices=[m.value for m in ControlMode], default=ControlMode.AUTO.value,
                   help="Initial horizontal control mode.")
    p.add_argument("--boost-decay", choices=[b.value for b in BoostDecay], default=BoostDecay.PER_TICK.value,
                   help="'tick': fixed decay per frame; 'second': decay with elapsed time.")
    p.add_argument("--save-level", type=str, default=None,
                   help="Also write the level in use to this file (e.g. to keep a generated track).")
    p.add_argument("--log-level", type=str, default="INFO")
    p.add_argument("--smoke", action="store_true", help="Run ~2 seconds and exit.")
    return p.parse_args(argv)


def build_simulation(args) -> Simulation:
    if args.seed is not None:
        level, seed = generate_level(None if args.seed == -1 else args.seed)
        logger.info("Using generated level (seed=%s)", seed)
    else:
        level = load_level(args.level)
    if args.save_level:
        path = write_level(level, args.save_level)
        logger.info("Saved level to %s", path)
    return Simulation(level,
                      control_mode=ControlMode(args.mode),
                      boost_decay=BoostDecay(args.boost_decay))


class FpsCounter:
    """Counts frames over FPS_WINDOW_S windows."""
    def __init__(self):
        self.timer = 0.0
        self.frames = 0
        self.fps = 0.0

    def tick(self, dt: float) -> float:
        self.frames += 1
        self.timer += dt
        if self.timer > FPS_WINDOW_S:
            self.fps = self.frames / FPS_WINDOW_S
            self.frames = 0
            self.timer -= FPS_WINDOW_S
        return self.fps


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        sim = build_simulation(args)
    except (FileNotFoundError, LevelFormatError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1)

    pygame.init()
    pygame.display.set_caption(WINDOW_TITLE)
    screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 14)
    fps = FpsCounter()
    elapsed = 0.0

    running = True
    while running:
        dt = clock.tick(FPS) / 1000.0
        if dt > MAX_TIMESTEP:  # clamp stalls
            dt = MAX_TIMESTEP
        elapsed += dt

        if not sim.ended:
            sim.update(dt)

        draw_frame(screen, sim, font, fps.tick(dt), HELP_TEXT)
        pygame.display.flip()

        for event in pygame.event.get():
            intent = intent_for_event(event)
            if intent is None:
                continue
            if intent is Intent.QUIT:
                running = False
            else:
                sim.apply(intent)

        if args.smoke and elapsed > 2.0:
            running = False

    pygame.quit()


if __name__ == "__main__":
    run()
