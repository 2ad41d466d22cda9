import logging
import sys

import pygame
from blocks_config import CONFIG, load_config
from blocks_game import Game, Intent
from blocks_input import KEY_INTENTS, ShiftRepeat
from blocks_layout import dims_for
from blocks_render import RenderAssets


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except TypeError:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, pygame.KEYUP])

    game = Game(load_config())
    dims = dims_for(game.config)
    screen = recreate_window(dims)
    pygame.display.set_caption("Falling Blocks")
    font = pygame.font.SysFont(None, 22)
    big_font = pygame.font.SysFont(None, 36)

    render = RenderAssets(dims, font, big_font)
    clock = pygame.time.Clock()
    shift = ShiftRepeat()
    soft_drop_held = False

    while True:
        dt = clock.tick_busy_loop(60)

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if e.type == pygame.KEYDOWN:
                if e.key == pygame.K_ESCAPE:
                    pygame.quit(); sys.exit()
                if e.key in KEY_INTENTS:
                    game.queue_intent(KEY_INTENTS[e.key])
                if e.key == pygame.K_DOWN:
                    soft_drop_held = True
            if e.type == pygame.KEYUP and e.key == pygame.K_DOWN:
                soft_drop_held = False

        keys = pygame.key.get_pressed()
        step = shift.intent(dt, keys[pygame.K_LEFT], keys[pygame.K_RIGHT])
        if step:
            game.queue_intent(step)
        if soft_drop_held:
            for _ in range(max(1, int(CONFIG["SOFT_DROP_MULT"]))):
                game.queue_intent(Intent.SOFT_DROP)

        game.tick(dt)
        render.draw(screen, game.snapshot())
        pygame.display.flip()


if __name__ == '__main__':
    main()
