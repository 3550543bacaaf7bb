from __future__ import annotations

import argparse
import logging
from typing import Dict

import pygame

from tetromino_engine.game import GameConfig, GameDriver, Intent, TetrisEngine
from .renderer import Renderer


KEY_TO_INTENT: Dict[int, Intent] = {
    pygame.K_LEFT: Intent.MOVE_LEFT,
    pygame.K_RIGHT: Intent.MOVE_RIGHT,
    pygame.K_DOWN: Intent.SOFT_DROP,
    pygame.K_SPACE: Intent.ROTATE,
    pygame.K_p: Intent.TOGGLE_PAUSE,
    pygame.K_RETURN: Intent.START,
    pygame.K_r: Intent.RESET,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=30)
    p.add_argument("--log-level", type=str, default="WARNING")
    return p


def run(seed: int | None = None, cell_size: int = 30) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        engine = TetrisEngine(GameConfig(random_seed=seed))
        driver = GameDriver(engine)
        renderer = Renderer(cell_size=cell_size)

        screen = pygame.display.set_mode(renderer.window_size(engine.grid.height, engine.grid.width))
        pygame.display.set_caption("Tetromino")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        intent = KEY_TO_INTENT.get(event.key)
                        if intent is not None:
                            driver.post(intent)

            driver.advance(clock.tick(60))
            renderer.draw(screen, engine.snapshot())
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper())
    run(seed=args.seed, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
