# flapsim/game/game.py
import sys, argparse, logging
import pygame
from pygame import K_SPACE, K_ESCAPE, K_RETURN, K_r
from .config import WIDTH, HEIGHT, FPS, TICK_MS, SEED_DEFAULT, GameConfig
from .driver import FixedStepDriver
from .render import draw_snapshot
from .simulation import Simulation, JUMP, RESTART

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Flappy bird, fixed-step simulation.")
    p.add_argument("--seed", type=int, default=None,
                   help="Pipe seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--tick-ms", type=int, default=TICK_MS,
                   help="Simulation tick length in milliseconds.")
    p.add_argument("--log-level", default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None  # Simulation draws one
    else:
        launch_seed = args.seed

    cfg = GameConfig(tick_ms=args.tick_ms)
    sim = Simulation(cfg, seed=launch_seed)
    driver = FixedStepDriver(sim)
    logger.info("starting seed=%s tick_ms=%d", sim.seed, cfg.tick_ms)

    pygame.init()
    pygame.display.set_caption("Flappy Bird")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("arial", 30, bold=True)

    while True:
        elapsed_ms = clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key == K_SPACE:
                    driver.post(JUMP)           # ignored by the sim once over
                if event.key in (K_RETURN, K_r):
                    driver.post(RESTART)

        driver.advance(elapsed_ms)

        draw_snapshot(screen, sim.snapshot(), font)
        pygame.display.flip()


if __name__ == "__main__":
    run()
