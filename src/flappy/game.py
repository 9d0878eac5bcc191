# src/flappy/game.py
import sys, argparse, logging, math
import pygame
from pygame import K_SPACE, K_ESCAPE, K_r, K_n
from .config import (
    WIDTH, HEIGHT, FPS, SEED_DEFAULT, SCORE_AMAZING, SCORE_GOOD,
    COLOR_BG, COLOR_FG, COLOR_BODY, COLOR_BODY_DEAD,
    COLOR_BARRIER, COLOR_BARRIER_EDGE, COLOR_GOLD, ConfigError,
)
from .clock import RunPhase, SimulationClock, Snapshot

logger = logging.getLogger(__name__)


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None,
                   help="Obstacle seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--log-level", type=str, default="info",
                   help="debug | info | warning | error")
    return p.parse_args()


def result_message(score: int, new_high: bool) -> str:
    if new_high:
        return "NEW HIGH SCORE!"
    if score > SCORE_AMAZING:
        return "AMAZING!"
    if score > SCORE_GOOD:
        return "GOOD JOB!"
    return "Keep practicing!"


def apply_resize(sim: SimulationClock, width: int, height: int) -> bool:
    """Window resize from the host. A viewport too short for the gap keeps the previous one."""
    try:
        sim.resize(width, height)
    except ConfigError as e:
        logger.warning("ignoring resize to %sx%s: %s", width, height, e)
        return False
    return True


def draw_world(screen: pygame.Surface, snap: Snapshot):
    for top, bottom in snap.barriers:
        for r in (top, bottom):
            if r.height <= 0:
                continue
            pygame.draw.rect(screen, COLOR_BARRIER, r)
            pygame.draw.rect(screen, COLOR_BARRIER_EDGE, r, width=4)

    # Ball + a cross so the (cosmetic) spin is visible
    color = COLOR_BODY_DEAD if snap.phase is RunPhase.ENDED else COLOR_BODY
    c = snap.body_rect.center
    radius = snap.body_rect.width // 2
    pygame.draw.circle(screen, color, c, radius)
    for a in (snap.body_angle, snap.body_angle + math.pi / 2):
        dx, dy = math.cos(a) * radius, math.sin(a) * radius
        pygame.draw.line(screen, (255, 255, 255), (c[0] - dx, c[1] - dy), (c[0] + dx, c[1] + dy), 3)


def run():
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None
    else:
        launch_seed = args.seed

    pygame.init()
    pygame.display.set_caption("Flappy Snake")
    screen = pygame.display.set_mode((WIDTH, HEIGHT), pygame.RESIZABLE)
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 18)
    big_font = pygame.font.SysFont("jetbrainsmono", 32)

    sim = SimulationClock(width=WIDTH, height=HEIGHT, seed=launch_seed)
    high_score = 0
    last_result = ""

    def on_end(state):
        nonlocal high_score, last_result
        new_high = sim.is_new_high_score(high_score)
        if state.score > high_score:
            logger.info("new best: %d (was %d)", state.score, high_score)
        high_score = max(high_score, state.score)
        last_result = result_message(state.score, new_high)

    sim.on_end(on_end)

    btn_w, btn_h = 260, 120
    def panel_rect() -> pygame.Rect:
        w, h = screen.get_size()
        return pygame.Rect((w - btn_w) // 2, (h - btn_h) // 2, btn_w, btn_h)

    while True:
        clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.VIDEORESIZE:
                apply_resize(sim, event.w, event.h)
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key == K_SPACE:
                    if sim.phase is RunPhase.IDLE:
                        sim.start()
                    sim.jump()
                if event.key == K_r and sim.phase is RunPhase.ENDED:
                    # Restart SAME seed
                    sim.start(seed=sim.stream.seed)
                if event.key == K_n and sim.phase is RunPhase.ENDED:
                    sim.stream.reseed(None)
                    sim.start()
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if sim.phase is RunPhase.ENDED:
                    if panel_rect().collidepoint(event.pos):
                        sim.start()
                else:
                    if sim.phase is RunPhase.IDLE:
                        sim.start()
                    sim.jump()

        sim.tick()

        # --- Render ---
        snap = sim.snapshot()
        screen.fill(COLOR_BG)
        draw_world(screen, snap)

        hud = f"Score: {snap.score}   Best: {high_score}   Seed: {sim.stream.seed}"
        screen.blit(font.render(hud, True, COLOR_FG), (12, 10))
        screen.blit(font.render("SPACE/click jump | ESC quit", True, COLOR_FG), (12, 32))

        if snap.phase is RunPhase.IDLE:
            msg = big_font.render("Press SPACE to start", True, COLOR_FG)
            w, h = screen.get_size()
            screen.blit(msg, ((w - msg.get_width()) // 2, h // 3))

        if snap.phase is RunPhase.ENDED:
            r = panel_rect()
            pygame.draw.rect(screen, (40, 60, 40), r, border_radius=10)
            pygame.draw.rect(screen, (90, 160, 90), r, width=2, border_radius=10)
            lines = [
                (big_font, f"Score {snap.score}", COLOR_GOLD),
                (font, last_result, (235, 245, 235)),
                (font, "Restart (R / click)  New (N)", (200, 220, 200)),
            ]
            y = r.top + 10
            for f, txt, col in lines:
                surf = f.render(txt, True, col)
                screen.blit(surf, (r.centerx - surf.get_width() // 2, y))
                y += surf.get_height() + 6

        pygame.display.flip()

if __name__ == "__main__":
    run()
