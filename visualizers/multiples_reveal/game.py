"""Multiples reveal scene: two columns of multiples, an answer box and a countdown."""

import logging

import pygame

from content_registry import PALETTE, load_fonts
from game_context import GameContext
from scene_manager import Scene
from visualizers.shared.questions import parse_pairs
from visualizers.shared.timers import Scheduler
from visualizers.shared.widgets import draw_button, draw_tile, grid_rects

from .round import DEFAULT_PAIRS, MAX_NUMBER, MultiplesRound

log = logging.getLogger(__name__)

TITLE = "MULTIPLES REVEAL"
MINIGAME_ID = "multiples_reveal"
GRID_COLUMNS = 6
TILE = (50, 32)
MAX_ANSWER_DIGITS = 4
NEXT_QUESTION_MS = 3000
HINT = "The LCM is the smallest number in both lists. Keep revealing until one shows up on both sides."


class MultiplesRevealScene(Scene):
    def __init__(self, manager, context=None, callback=None, pairs=None):
        super().__init__(manager)
        self.context = context or GameContext()
        self.callback = callback
        self.screen = manager.screen
        self.w, self.h = manager.size
        self.font_big, self.font, self.font_small = load_fonts()

        self.pairs = [tuple(p) for p in (pairs or DEFAULT_PAIRS)]
        self.index = 0
        self.scheduler = Scheduler()
        self.show_hint = False
        self.custom_text = None  # None while the custom-numbers entry is closed
        self.custom_error = ""
        self._completed = False
        self.round = self._make_round(*self.pairs[0])

    # -------------------------------------------------------------------------
    def _make_round(self, a, b):
        self.scheduler.cancel_all()
        return MultiplesRound(a, b, self.scheduler, on_answer=self._on_answer)

    def next_question(self):
        self.index = (self.index + 1) % len(self.pairs)
        self.round = self._make_round(*self.pairs[self.index])

    def _on_answer(self, passed):
        self.context.record_result(
            {
                "minigame": MINIGAME_ID,
                "question": self.round.numbers,
                "answer": self.round.selected,
                "outcome": "pass" if passed else "fail",
            }
        )
        if not passed:
            self.scheduler.call_later(NEXT_QUESTION_MS, self.next_question, label="next-question")

    def _apply_custom(self):
        try:
            (a, b), *rest = parse_pairs(self.custom_text or "", limit=MAX_NUMBER)
        except ValueError as e:
            self.custom_error = str(e)
            return False
        if rest:
            self.custom_error = "enter a single pair, e.g. 4x6"
            return False
        self.round = self._make_round(a, b)
        self.custom_text = None
        self.custom_error = ""
        return True

    # -------------------------------------------------------------------------
    def layout(self):
        rects = {}
        for side, cx in ((0, self.w // 4), (1, self.w * 3 // 4)):
            area = pygame.Rect(cx - self.w // 5, 160, self.w * 2 // 5, self.h - 340)
            rects[side] = grid_rects(area, len(self.round.slots(side)), GRID_COLUMNS, TILE, gap=6)
        row_y = self.h - 120
        rects["reveal"] = pygame.Rect(self.w // 2 - 320, row_y, 200, 36)
        rects["answer"] = pygame.Rect(self.w // 2 - 100, row_y, 120, 36)
        rects["check"] = pygame.Rect(self.w // 2 + 30, row_y, 140, 36)
        rects["next"] = pygame.Rect(self.w // 2 + 180, row_y, 150, 36)
        rects["hint"] = pygame.Rect(16, self.h - 46, 110, 30)
        rects["custom"] = pygame.Rect(self.w - 206, self.h - 46, 190, 30)
        return rects

    def handle_event(self, event):
        if event.type == pygame.KEYDOWN:
            if self.custom_text is not None:
                self._handle_custom_key(event)
            else:
                self._handle_key(event)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._handle_click(event.pos)

    def _handle_custom_key(self, event):
        if event.key == pygame.K_ESCAPE:
            self.custom_text = None
            self.custom_error = ""
        elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self._apply_custom()
        elif event.key == pygame.K_BACKSPACE:
            self.custom_text = self.custom_text[:-1]
        elif event.unicode and (event.unicode.isdigit() or event.unicode.lower() == "x"):
            self.custom_text += event.unicode.lower()

    def _handle_key(self, event):
        rnd = self.round
        if event.key == pygame.K_ESCAPE:
            self.finish()
        elif event.key in (pygame.K_r, pygame.K_SPACE):
            rnd.reveal_next()
        elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            rnd.submit()
        elif event.key == pygame.K_BACKSPACE:
            if rnd.can_answer:
                rnd.selected = rnd.selected[:-1]
        elif event.key in (pygame.K_n, pygame.K_RIGHT):
            self.next_question()
        elif event.key == pygame.K_h:
            self.show_hint = not self.show_hint
        elif event.key == pygame.K_c:
            self.custom_text = ""
        elif event.unicode and event.unicode.isdigit():
            if rnd.can_answer and len(rnd.selected) < MAX_ANSWER_DIGITS:
                rnd.selected += event.unicode

    def _handle_click(self, pos):
        rects = self.layout()
        rnd = self.round
        for side in (0, 1):
            for i, rect in enumerate(rects[side]):
                if rect.collidepoint(pos):
                    rnd.select(side, i)
                    return
        if rects["reveal"].collidepoint(pos):
            rnd.reveal_next()
        elif rects["check"].collidepoint(pos):
            rnd.submit()
        elif rects["next"].collidepoint(pos):
            self.next_question()
        elif rects["hint"].collidepoint(pos):
            self.show_hint = not self.show_hint
        elif rects["custom"].collidepoint(pos):
            self.custom_text = None if self.custom_text is not None else ""

    def update(self, dt):
        self.scheduler.advance(dt * 1000.0)

    # -------------------------------------------------------------------------
    def draw(self):
        rnd = self.round
        a, b = rnd.numbers
        rects = self.layout()
        self.screen.fill(PALETTE["background"])
        title = self.font_big.render(TITLE, True, PALETTE["title"])
        self.screen.blit(title, title.get_rect(center=(self.w // 2, 28)))
        prompt = self.font.render(f"Find the LCM of {a} and {b}", True, PALETTE["text"])
        self.screen.blit(prompt, prompt.get_rect(center=(self.w // 2, 72)))
        sub = self.font_small.render(
            "Reveal multiples and find the first number that appears in both sequences.", True, PALETTE["muted"]
        )
        self.screen.blit(sub, sub.get_rect(center=(self.w // 2, 100)))

        colors = (PALETTE["primary"], PALETTE["secondary"])
        for side in (0, 1):
            head = self.font.render(f"Multiples of {rnd.numbers[side]}", True, colors[side])
            self.screen.blit(head, head.get_rect(center=(self.w * (1 + 2 * side) // 4, 136)))
            latest = rnd.steps[side] - 1
            for i, ((value, visible), rect) in enumerate(zip(rnd.slots(side), rects[side])):
                if not visible:
                    draw_tile(self.screen, rect, "?", self.font_small, PALETTE["tile_hidden"], PALETTE["muted"])
                    continue
                if rnd.selected == str(value):
                    fill, text = colors[side], PALETTE["text"]
                elif rnd.is_common(value):
                    fill, text = (PALETTE["success"] if rnd.result else PALETTE["common"]), PALETTE["text"]
                elif i == latest:
                    fill, text = PALETTE["tile_current"], PALETTE["panel_text"]
                else:
                    fill, text = PALETTE["tile"], PALETTE["panel_text"]
                draw_tile(self.screen, rect, value, self.font_small, fill, text)

        self._draw_controls(rects)

    def _draw_controls(self, rects):
        rnd = self.round
        if rnd.found:
            found = self.font_small.render(
                f"Common Multiple Found! The LCM is {rnd.target}. Select it and check your answer.",
                True,
                PALETTE["success"],
            )
            self.screen.blit(found, found.get_rect(midbottom=(self.w // 2, rects["answer"].top - 12)))
        draw_button(self.screen, rects["reveal"], "Reveal Next Multiple", self.font_small, not rnd.found and rnd.result is None)

        box = rects["answer"]
        pygame.draw.rect(self.screen, PALETTE["stack_bg"], box, border_radius=8)
        shown = rnd.selected or "?"
        txt = self.font.render(shown, True, PALETTE["panel_text"] if rnd.selected else PALETTE["muted"])
        self.screen.blit(txt, txt.get_rect(center=box.center))
        draw_button(self.screen, rects["check"], "Check Answer", self.font_small, rnd.can_answer and bool(rnd.selected))
        draw_button(self.screen, rects["next"], "Next Question >", self.font_small)

        left = rnd.time_left_ms
        if left is not None:
            timer = self.font_small.render(f"Time left: {int(left // 1000) + 1}s", True, PALETTE["title"])
            self.screen.blit(timer, timer.get_rect(midtop=(box.centerx, box.bottom + 8)))
        if rnd.message:
            color = PALETTE["success"] if rnd.result else PALETTE["error"]
            msg = self.font.render(rnd.message, True, color)
            self.screen.blit(msg, msg.get_rect(midtop=(self.w // 2, box.bottom + 30)))

        draw_button(self.screen, rects["hint"], "Hide Hint" if self.show_hint else "Get Hint", self.font_small)
        if self.show_hint:
            hint = self.font_small.render(HINT, True, PALETTE["tip_bg"])
            self.screen.blit(hint, hint.get_rect(midleft=(rects["hint"].right + 12, rects["hint"].centery)))

        label = "Hide Custom Input" if self.custom_text is not None else "Use Your Own Numbers"
        draw_button(self.screen, rects["custom"], label, self.font_small)
        if self.custom_text is not None:
            entry = self.font.render(f"Your numbers (AxB): {self.custom_text}_", True, PALETTE["text"])
            self.screen.blit(entry, entry.get_rect(bottomright=(rects["custom"].right, rects["custom"].top - 8)))
            if self.custom_error:
                err = self.font_small.render(self.custom_error, True, PALETTE["error"])
                self.screen.blit(err, err.get_rect(bottomright=(rects["custom"].right, rects["custom"].top - 36)))

    # -------------------------------------------------------------------------
    def finish(self):
        if self._completed:
            return
        self._completed = True
        self.scheduler.cancel_all()
        answered = [r for r in self.context.results if r.get("minigame") == MINIGAME_ID]
        self.context.last_result = {
            "minigame": MINIGAME_ID,
            "outcome": "done" if answered else "quit",
            "answered": len(answered),
        }
        log.info("leaving %s: %s", MINIGAME_ID, self.context.last_result)
        self.manager.pop()
        if self.callback:
            self.callback(self.context)


def launch(manager, context, on_exit, **kwargs):
    """Entry point used by the main menu."""
    return MultiplesRevealScene(manager, context, on_exit, **kwargs)
