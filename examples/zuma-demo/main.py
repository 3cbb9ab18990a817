"""
zuma-demo
Playable front end for zuma-game: a ball chain rolling down a spiral toward the hole.
"""

import logging
import math
import sys

import pygame

from zuma_game import GAME_OVER, VICTORY, Status, ZumaGame

# --- Configuration ---
FPS = 60
TITLE = "zuma-demo"

BG_COLOR = (34, 34, 34)
GROOVE_OUTER = (85, 85, 85)
GROOVE_INNER = (17, 17, 17)
HUD_COLOR = (220, 220, 220)
SHOOTER_BODY = (136, 136, 136)
SHOOTER_NOZZLE = (102, 102, 102)
BALL_COLORS = {
    "red": (255, 0, 0),
    "green": (0, 255, 0),
    "blue": (0, 0, 255),
    "yellow": (255, 255, 0),
}
WIN_COLOR = (68, 255, 68)
LOSE_COLOR = (255, 68, 68)


def draw_ball(screen, x, y, color_name, radius):
    color = BALL_COLORS.get(color_name, (200, 200, 200))
    center = (int(x), int(y))
    pygame.draw.circle(screen, color, center, int(radius))
    highlight = (int(x - radius / 3), int(y - radius / 3))
    pygame.draw.circle(screen, (255, 255, 255), highlight, max(2, int(radius / 5)))
    pygame.draw.circle(screen, (0, 0, 0), center, int(radius), 1)


def draw_path(screen, game):
    points = [(int(x), int(y)) for x, y in game.path.points]
    pygame.draw.lines(screen, GROOVE_OUTER, False, points, 44)
    pygame.draw.lines(screen, GROOVE_INNER, False, points, 36)
    end = points[-1]
    pygame.draw.circle(screen, (0, 0, 0), end, 30)


def draw_shooter(screen, game, radius):
    shooter = game.shooter
    sx, sy = shooter.position
    pygame.draw.circle(screen, SHOOTER_BODY, (int(sx), int(sy)), 40)

    cos_a, sin_a = math.cos(shooter.angle), math.sin(shooter.angle)
    nozzle_end = (sx + cos_a * 50, sy + sin_a * 50)
    pygame.draw.line(screen, SHOOTER_NOZZLE, (sx, sy), nozzle_end, 20)

    draw_ball(screen, sx + cos_a * 15, sy + sin_a * 15, shooter.current_color, radius)
    draw_ball(screen, sx - cos_a * 25, sy - sin_a * 25, shooter.next_color, 10)


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    game = ZumaGame()
    config = game.config
    radius = config.chain.ball_radius

    pygame.init()
    screen = pygame.display.set_mode((int(config.width), int(config.height)))
    pygame.display.set_caption(TITLE)
    pg_clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 18)
    big_font = pygame.font.SysFont("monospace", 48, bold=True)

    banner = {"text": "", "color": HUD_COLOR}

    def on_outcome(name, data):
        if name == VICTORY:
            banner.update(text="VICTORY!", color=WIN_COLOR)
        else:
            banner.update(text="GAME OVER", color=LOSE_COLOR)

    game.subscribe(VICTORY, on_outcome)
    game.subscribe(GAME_OVER, on_outcome)

    running = True
    while running:
        pg_clock.tick(FPS)

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    game.swap()
                elif event.key == pygame.K_r:
                    game.restart()
                    banner.update(text="")
            elif event.type == pygame.MOUSEMOTION:
                game.aim_at(*event.pos)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                game.shoot()

        # --- Update ---
        game.step()

        # --- Draw ---
        screen.fill(BG_COLOR)
        draw_path(screen, game)
        for view in game.chain.nodes():
            draw_ball(screen, view.x, view.y, view.color, radius)
        for shot in game.projectiles:
            draw_ball(screen, shot.position[0], shot.position[1], shot.color, shot.radius)
        draw_shooter(screen, game, radius)

        hud = font.render(
            f"Score: {game.score}   Balls: {len(game.chain)}   "
            "Click=Shoot  Space=Swap  R=Restart  Esc=Quit",
            True,
            HUD_COLOR,
        )
        screen.blit(hud, (10, 8))

        if game.status is not Status.PLAYING and banner["text"]:
            surf = big_font.render(banner["text"], True, banner["color"])
            rect = surf.get_rect(center=(config.width / 2, config.height / 2))
            screen.blit(surf, rect)

        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
