"""Factor finder scene: worked example, candidate grid, visual check."""

import logging

import pygame

from content_registry import PALETTE, load_fonts
from game_context import GameContext
from scene_manager import Scene
from visualizers.shared.timers import Scheduler
from visualizers.shared.widgets import draw_button, draw_tile, grid_rects

from .round import DEFAULT_NUMBERS, FactorRound, Phase, group_description

log = logging.getLogger(__name__)

TITLE = "FACTOR FINDER"
MINIGAME_ID = "factor_finder"
GRID_COLUMNS = 8
TILE = (44, 36)
EXAMPLE_BLOCK = 18
MAX_CHECK_LINES = 10


class FactorFinderScene(Scene):
    def __init__(self, manager, context=None, callback=None, numbers=None):
        super().__init__(manager)
        self.context = context or GameContext()
        self.callback = callback
        self.screen = manager.screen
        self.w, self.h = manager.size
        self.font_big, self.font, self.font_small = load_fonts()

        self.numbers = list(numbers or DEFAULT_NUMBERS)
        self.index = 0
        self.scheduler = Scheduler()
        self.round = FactorRound(self.numbers[0], self.scheduler)
        self.show_hint = True
        self.completed = 0
        self._completed_scene = False

    # -------------------------------------------------------------------------
    def new_round(self):
        """Move on to the next number, dropping anything still pending."""
        self.scheduler.cancel_all()
        self.index = (self.index + 1) % len(self.numbers)
        self.round = FactorRound(self.numbers[self.index], self.scheduler)

    def _check(self):
        result = self.round.check()
        if result is None:
            return
        self.context.record_result(
            {
                "minigame": MINIGAME_ID,
                "question": self.round.number,
                "answer": sorted(self.round.selected),
                "outcome": "pass" if result.passed else "fail",
            }
        )
        if result.passed:
            self.completed += 1

    def _primary_action(self):
        if self.round.phase is Phase.EXAMPLE:
            self.round.start_practice()
        elif self.round.phase is Phase.PRACTICE:
            self._check()
        else:
            self.new_round()

    # -------------------------------------------------------------------------
    def layout(self):
        tiles_area = pygame.Rect(40, 170, self.w // 2 - 40, self.h - 300)
        tiles = grid_rects(tiles_area, self.round.number, GRID_COLUMNS, TILE)
        primary = pygame.Rect(0, 0, 260, 38)
        primary.midbottom = (self.w // 2, self.h - 70)
        if self.round.phase is Phase.PRACTICE:
            primary.centerx = tiles_area.centerx
        hint = pygame.Rect(0, 0, 120, 30)
        hint.bottomleft = (16, self.h - 16)
        return {"tiles": tiles, "primary": primary, "hint": hint}

    def handle_event(self, event):
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.finish()
            elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE):
                self._primary_action()
            elif event.key == pygame.K_h:
                self.show_hint = not self.show_hint
            elif event.key in (pygame.K_n, pygame.K_RIGHT):
                self.new_round()
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            rects = self.layout()
            if rects["hint"].collidepoint(event.pos):
                self.show_hint = not self.show_hint
                return
            if rects["primary"].collidepoint(event.pos):
                self._primary_action()
                return
            if self.round.phase is Phase.PRACTICE:
                for candidate, rect in zip(self.round.candidates, rects["tiles"]):
                    if rect.collidepoint(event.pos):
                        self.round.toggle(candidate)
                        return

    def update(self, dt):
        self.scheduler.advance(dt * 1000.0)

    # -------------------------------------------------------------------------
    def draw(self):
        rnd = self.round
        self.screen.fill(PALETTE["background"])
        title = self.font_big.render(TITLE, True, PALETTE["title"])
        self.screen.blit(title, title.get_rect(center=(self.w // 2, 28)))
        heading = self.font.render(f"Finding Factors of {rnd.number}", True, PALETTE["text"])
        self.screen.blit(heading, heading.get_rect(center=(self.w // 2, 72)))
        sub = self.font_small.render("A factor is a number that divides evenly into another number", True, PALETTE["muted"])
        self.screen.blit(sub, sub.get_rect(center=(self.w // 2, 100)))

        rects = self.layout()
        if rnd.phase is Phase.EXAMPLE:
            self._draw_example()
            draw_button(self.screen, rects["primary"], "I Understand - Let's Practice!", self.font_small)
        elif rnd.phase is Phase.PRACTICE:
            self._draw_practice(rects)
        else:
            done = self.font.render(f"You found every factor of {rnd.number}!", True, PALETTE["success"])
            self.screen.blit(done, done.get_rect(center=(self.w // 2, self.h // 2 - 40)))
            draw_button(self.screen, rects["primary"], "Try Another Number", self.font_small)

        if rnd.feedback and rnd.phase is not Phase.COMPLETE:
            color = PALETTE["success"] if rnd.last_check.passed else PALETTE["error"]
            msg = self.font_small.render(rnd.feedback, True, color)
            self.screen.blit(msg, msg.get_rect(midbottom=(self.w // 2, self.h - 50)))

        draw_button(self.screen, rects["hint"], "Hide Hint" if self.show_hint else "Show Hint", self.font_small)
        if self.show_hint and rnd.phase is Phase.PRACTICE:
            hint = self.font_small.render(
                f"Try dividing {rnd.number} by each number from 1 to {rnd.number}; no remainder means a factor.",
                True,
                PALETTE["tip_bg"],
            )
            self.screen.blit(hint, hint.get_rect(midleft=(rects["hint"].right + 14, rects["hint"].centery)))

    def _draw_blocks(self, top, factor):
        """``number`` blocks arranged in ``factor`` rows."""
        n = self.round.number
        per_row = n // factor if n % factor == 0 else n
        width = per_row * (EXAMPLE_BLOCK + 3)
        left = self.w // 2 - width // 2
        for i in range(n):
            row, col = divmod(i, per_row)
            rect = pygame.Rect(left + col * (EXAMPLE_BLOCK + 3), top + row * (EXAMPLE_BLOCK + 3), EXAMPLE_BLOCK, EXAMPLE_BLOCK)
            pygame.draw.rect(self.screen, PALETTE["primary"], rect, border_radius=3)

    def _draw_example(self):
        self._draw_blocks(180, 1)
        text = self.font.render(group_description(self.round.number, 1), True, PALETTE["text"])
        self.screen.blit(text, text.get_rect(center=(self.w // 2, 240)))

    def _draw_practice(self, rects):
        rnd = self.round
        prompt = self.font.render(f"Select all factors of {rnd.number}", True, PALETTE["text"])
        self.screen.blit(prompt, prompt.get_rect(midleft=(40, 140)))
        for candidate, rect in zip(rnd.candidates, rects["tiles"]):
            chosen = candidate in rnd.selected
            draw_tile(
                self.screen,
                rect,
                candidate,
                self.font_small,
                PALETTE["selected"] if chosen else PALETTE["tile"],
                PALETTE["text"] if chosen else PALETTE["panel_text"],
            )

        chosen = ", ".join(map(str, rnd.selected)) if rnd.selected else "None"
        line = self.font_small.render(f"Selected factors: {chosen}", True, PALETTE["muted"])
        self.screen.blit(line, line.get_rect(midbottom=(rects["primary"].centerx, rects["primary"].top - 8)))
        draw_button(self.screen, rects["primary"], "Check My Answer", self.font_small, rnd.can_check)

        x = self.w // 2 + 30
        head = self.font.render("Visual Factor Check", True, PALETTE["text"])
        self.screen.blit(head, (x, 130))
        for i, factor in enumerate(sorted(rnd.selected)[:MAX_CHECK_LINES]):
            ok = rnd.number % factor == 0
            line = self.font_small.render(group_description(rnd.number, factor), True, PALETTE["success"] if ok else PALETTE["error"])
            self.screen.blit(line, (x, 170 + i * 26))

    # -------------------------------------------------------------------------
    def finish(self):
        if self._completed_scene:
            return
        self._completed_scene = True
        self.scheduler.cancel_all()
        self.context.last_result = {
            "minigame": MINIGAME_ID,
            "outcome": "done" if self.completed else "quit",
            "completed": self.completed,
        }
        log.info("leaving %s: %s", MINIGAME_ID, self.context.last_result)
        self.manager.pop()
        if self.callback:
            self.callback(self.context)


def launch(manager, context, on_exit, **kwargs):
    """Entry point used by the main menu."""
    return FactorFinderScene(manager, context, on_exit, **kwargs)
