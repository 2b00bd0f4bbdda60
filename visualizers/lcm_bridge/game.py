"""LCM bridge scene: stacks, bridge and walk above, quiz panel below."""

import logging

import pygame

from content_registry import PALETTE, load_fonts
from game_context import GameContext
from scene_manager import Scene
from visualizers.shared.feedback import FeedbackBanner
from visualizers.shared.widgets import draw_button

from .bridge import CrossingState, DragHandle
from .config import BridgeConfig
from .engine import StackBridgeEngine
from .graphics import (
    BLOCK_COLORS,
    LABELS,
    RenderedLayout,
    draw_avatar,
    draw_bridge,
    draw_stack,
)
from .quiz import DEFAULT_PAIRS, QuestionDeck
from .stacks import Actor

log = logging.getLogger(__name__)

TITLE = "LCM FINDER"
MINIGAME_ID = "lcm_bridge"
HEADER_H = 48
QUIZ_PANEL_H = 150
MAX_ANSWER_DIGITS = 4
TIP = "Tip: Build equal heights, add the bridge, then walk across."

KEY_ACTIONS = {
    pygame.K_a: "add_primary",
    pygame.K_s: "add_secondary",
    pygame.K_b: "bridge",
    pygame.K_w: "walk",
}


class LCMBridgeScene(Scene):
    def __init__(self, manager, context=None, callback=None, config=None, pairs=None):
        super().__init__(manager)
        self.context = context or GameContext()
        self.callback = callback
        self.screen = manager.screen
        self.w, self.h = manager.size
        self.config = config or BridgeConfig()
        self.font_big, self.font, self.font_small = load_fonts()

        container = pygame.Rect(0, HEADER_H, self.w, self.h - HEADER_H - QUIZ_PANEL_H)
        self.layout = RenderedLayout(container)
        self.deck = QuestionDeck(pairs or DEFAULT_PAIRS, on_answer=self._on_answer)
        self.engine = StackBridgeEngine(self.layout, self.config, on_stacks_changed=self._persist_stack)
        self.banner = FeedbackBanner(duration=1.0)
        self.answer_text = ""
        self._completed = False

        saved = dict(self.context.flags.get(MINIGAME_ID, {}))
        self.deck.go_to(saved.get("question", 0))
        self._sync_question()
        if saved.get("question") == self.deck.index:
            self.engine.restore_stacks(saved.get("primary", ()), saved.get("secondary", ()))
        self.layout.update(self.engine)

    # -------------------------------------------------------------------------
    def _sync_question(self):
        a, b = self.deck.current
        self.engine.notify_question_changed(self.deck.question_token)
        self.engine.set_block_sizes(a, b)
        self.context.flags.setdefault(MINIGAME_ID, {})["question"] = self.deck.index
        self.answer_text = self.deck.answers[self.deck.index] or ""
        self.banner.cancel()

    def _persist_stack(self, actor, blocks):
        saved = self.context.flags.setdefault(MINIGAME_ID, {})
        saved["question"] = self.deck.index
        saved[actor.value] = list(blocks)

    def _on_answer(self, passed):
        a, b = self.deck.current
        self.context.record_result(
            {
                "minigame": MINIGAME_ID,
                "question": (a, b),
                "answer": self.answer_text,
                "outcome": "pass" if passed else "fail",
            }
        )
        self.banner.show(passed, self.deck.correct_answer)

    # -------------------------------------------------------------------------
    def handle_event(self, event):
        if event.type == pygame.KEYDOWN:
            self._handle_key(event)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            name = self.layout.hit(event.pos) or self._quiz_hit(event.pos)
            if name:
                self._activate(name)
        elif event.type == pygame.MOUSEMOTION:
            if self.engine.bridge.dragging is not None:
                self.engine.drag_to(event.pos[0] - self.layout.container.left)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.engine.release_drag()

    def _handle_key(self, event):
        if event.key == pygame.K_ESCAPE:
            self.finish()
        elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            self._activate("submit")
        elif event.key == pygame.K_BACKSPACE:
            if not self.deck.answered:
                self.answer_text = self.answer_text[:-1]
        elif event.key == pygame.K_LEFT:
            self._activate("prev")
        elif event.key == pygame.K_RIGHT:
            self._activate("next")
        elif event.key in KEY_ACTIONS:
            self._activate(KEY_ACTIONS[event.key])
        elif event.unicode and event.unicode.isdigit():
            if not self.deck.answered and len(self.answer_text) < MAX_ANSWER_DIGITS:
                self.answer_text += event.unicode

    def _activate(self, name):
        engine = self.engine
        if name == "add_primary":
            engine.add_block(Actor.PRIMARY)
        elif name == "add_secondary":
            engine.add_block(Actor.SECONDARY)
        elif name == "bridge":
            engine.offer_bridge()
        elif name == "walk":
            engine.walk_across()
        elif name == "handle_left":
            engine.begin_drag(DragHandle.LEFT)
        elif name == "handle_right":
            engine.begin_drag(DragHandle.RIGHT)
        elif name == "submit":
            if self.deck.submit(self.answer_text) is not None:
                engine.notify_submitted(self.deck.submit_token)
        elif name == "prev":
            if self.deck.prev():
                self._sync_question()
        elif name == "next":
            if self.deck.next():
                self._sync_question()
            elif self.deck.finished:
                self.finish()

    # -------------------------------------------------------------------------
    def update(self, dt):
        # Lay out first so deferred geometry reads this frame's boxes.
        self.layout.update(self.engine)
        self.engine.update(dt * 1000.0)
        self.banner.update(dt)

    # -------------------------------------------------------------------------
    def _quiz_rects(self):
        panel = pygame.Rect(self.w // 2 - 260, self.h - QUIZ_PANEL_H + 8, 520, QUIZ_PANEL_H - 16)
        answer = pygame.Rect(0, 0, 150, 34)
        answer.midtop = (panel.centerx, panel.top + 48)
        row_y = panel.bottom - 44
        prev_btn = pygame.Rect(panel.left + 16, row_y, 110, 32)
        submit_btn = pygame.Rect(0, row_y, 130, 32)
        submit_btn.centerx = panel.centerx
        next_btn = pygame.Rect(panel.right - 126, row_y, 110, 32)
        return {
            "panel": panel,
            "answer": answer,
            "prev": prev_btn,
            "submit": submit_btn,
            "next": next_btn,
        }

    def _quiz_hit(self, pos):
        rects = self._quiz_rects()
        for name in ("prev", "submit", "next"):
            if rects[name].collidepoint(pos):
                return name
        return None

    def draw(self):
        self.screen.fill(PALETTE["background"])
        title = self.font_big.render(TITLE, True, PALETTE["title"])
        self.screen.blit(title, title.get_rect(center=(self.w // 2, HEADER_H // 2)))
        self._draw_visualizer()
        self._draw_quiz()

    def _draw_visualizer(self):
        engine = self.engine
        layout = self.layout
        c = layout.container
        rects = layout.rects

        tip = self.font_small.render(TIP, True, PALETTE["tip"])
        tip_rect = tip.get_rect(midtop=(c.centerx, c.top + 10))
        pygame.draw.rect(self.screen, PALETTE["tip_bg"], tip_rect.inflate(20, 8), border_radius=12)
        self.screen.blit(tip, tip_rect)

        for actor in Actor:
            key = actor.value
            stack = rects[f"{key}_stack"]
            draw_stack(
                self.screen,
                stack,
                engine.report_stack_contents(actor),
                self.config.block_scale,
                self.config.block_gap,
                BLOCK_COLORS[actor],
                self.font_small,
                layout.scroll[actor],
            )
            label = self.font.render(LABELS[actor], True, PALETTE["text"])
            self.screen.blit(label, label.get_rect(midtop=(stack.centerx, stack.bottom + 6)))
            total = self.font_small.render(f"Total: {engine.model.stacks[actor].total}", True, PALETTE["muted"])
            self.screen.blit(total, total.get_rect(midtop=(stack.centerx, stack.bottom + 30)))
            draw_button(
                self.screen,
                layout.buttons[f"add_{key}"],
                f"Add {LABELS[actor]} Block",
                self.font_small,
                engine.can_add_block,
            )

        draw_avatar(self.screen, rects["primary_avatar"], PALETTE["shirt"])
        if not engine.traveler_hidden:
            draw_avatar(self.screen, rects["secondary_avatar"], PALETTE["shirt"])

        span = engine.span
        if span is not None and span.placed:
            handles = [layout.buttons[n] for n in ("handle_left", "handle_right") if n in layout.buttons]
            draw_bridge(self.screen, layout.bridge_rect(span, self.config.bridge_thickness), handles)

        if engine.state is CrossingState.IN_PROGRESS:
            walker = layout.walker_rect(engine.traveler_left, engine.traveler_offset)
            draw_avatar(self.screen, walker, PALETTE["shirt"])
        resting = engine.resting_position
        if resting is not None:
            rect = layout.resting_rect(resting)
            if rect is not None:
                draw_avatar(self.screen, rect, PALETTE["shirt"])

        draw_button(self.screen, layout.buttons["bridge"], "Add Bridge", self.font_small, engine.can_offer_bridge)
        draw_button(self.screen, layout.buttons["walk"], "Walk Across", self.font_small, engine.can_walk)
        if engine.message:
            msg = self.font.render(engine.message, True, PALETTE["error"])
            self.screen.blit(msg, msg.get_rect(midbottom=(c.centerx, c.bottom - 14)))

    def _draw_quiz(self):
        rects = self._quiz_rects()
        deck = self.deck
        panel = rects["panel"]
        pygame.draw.rect(self.screen, PALETTE["panel"], panel, border_radius=14)
        a, b = deck.current
        question = self.font.render(
            f"Question {deck.index + 1} of {len(deck.pairs)}: What is the LCM of {a} and {b}?",
            True,
            PALETTE["panel_text"],
        )
        self.screen.blit(question, question.get_rect(midtop=(panel.centerx, panel.top + 14)))

        box = rects["answer"]
        pygame.draw.rect(self.screen, PALETTE["stack_bg"], box, border_radius=8)
        pygame.draw.rect(self.screen, PALETTE["button"], box, 2, border_radius=8)
        shown = self.answer_text or "Enter LCM"
        color = PALETTE["panel_text"] if self.answer_text else PALETTE["muted"]
        txt = self.font.render(shown, True, color)
        self.screen.blit(txt, txt.get_rect(center=box.center))

        last = deck.index + 1 == len(deck.pairs)
        draw_button(self.screen, rects["prev"], "< Prev", self.font_small, deck.index > 0)
        draw_button(self.screen, rects["submit"], "Submit", self.font_small, not deck.answered)
        draw_button(self.screen, rects["next"], "Finish" if last else "Next >", self.font_small, not last or deck.finished)
        self.banner.draw(self.screen, self.font, (panel.centerx, panel.top - 18))

    # -------------------------------------------------------------------------
    def finish(self):
        if self._completed:
            return
        self._completed = True
        answered = [r for r in self.deck.results if r is not None]
        self.context.last_result = {
            "minigame": MINIGAME_ID,
            "outcome": "done" if self.deck.finished else "quit",
            "answered": len(answered),
        }
        log.info("leaving %s: %s", MINIGAME_ID, self.context.last_result)
        self.manager.pop()
        if self.callback:
            self.callback(self.context)


def launch(manager, context, on_exit, **kwargs):
    """Entry point used by boot.py."""
    return LCMBridgeScene(manager, context, on_exit, **kwargs)
