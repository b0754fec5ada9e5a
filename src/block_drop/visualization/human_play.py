from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional, Sequence

import pygame

from block_drop.game import Board, BlockDropGame, Clock, Command, GameRules
from .renderer import Renderer


logger = logging.getLogger(__name__)

KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_a: Command.MOVE_LEFT,
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_d: Command.MOVE_RIGHT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_e: Command.ROTATE_CW,
    pygame.K_UP: Command.ROTATE_CW,
    pygame.K_q: Command.ROTATE_CCW,
    pygame.K_z: Command.ROTATE_CCW,
    pygame.K_s: Command.SOFT_DROP_START,
    pygame.K_DOWN: Command.SOFT_DROP_START,
    pygame.K_p: Command.PAUSE_TOGGLE,
    pygame.K_RETURN: Command.START,
}

KEY_RELEASE_TO_COMMAND: Dict[int, Command] = {
    pygame.K_s: Command.SOFT_DROP_STOP,
    pygame.K_DOWN: Command.SOFT_DROP_STOP,
}


def run(seed: Optional[int] = None, cell_size: int = 28) -> None:
    pygame.init()
    try:
        rules = GameRules()
        board = Board()
        game = BlockDropGame(board=board, clock=Clock(rules.initial_speed), rules=rules, seed=seed)
        renderer = Renderer(cell_size=cell_size)
        screen = pygame.display.set_mode(renderer.window_size(board))
        pygame.display.set_caption("Block Drop")
        clock = pygame.time.Clock()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        command = KEY_TO_COMMAND.get(event.key)
                        if command is not None:
                            game.handle(command)
                elif event.type == pygame.KEYUP:
                    command = KEY_RELEASE_TO_COMMAND.get(event.key)
                    if command is not None:
                        game.handle(command)

            game.frame()
            renderer.draw(screen, board, game.view())
            clock.tick(rules.frames_per_second)
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Block Drop")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    logger.info("starting block drop (seed=%s)", args.seed)
    run(seed=args.seed, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
