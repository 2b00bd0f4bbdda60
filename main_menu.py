import logging

import pygame

from content_registry import PALETTE, load_fonts
from game_context import GameContext
from scene_manager import Scene
from visualizer_loader import load_visualizer_module

log = logging.getLogger(__name__)

FADE_SPEED = 200

ACTIVITIES = (
    ("lcm_bridge", "Bridge Builder"),
    ("multiples_reveal", "Multiples Reveal"),
    ("factor_finder", "Factor Finder"),
)


class Button:
    def __init__(self, rect, text, font, key=None):
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.key = key
        self.hover = False

    def draw(self, surf):
        bg = PALETTE["button"] if self.hover else PALETTE["button_off"]
        pygame.draw.rect(surf, bg, self.rect, border_radius=10)
        pygame.draw.rect(surf, PALETTE["outline"], self.rect, 2, border_radius=10)
        txt = self.font.render(self.text, True, PALETTE["text"])
        surf.blit(txt, txt.get_rect(center=self.rect.center))

    def hit(self, pos):
        return self.rect.collidepoint(pos)


# -----------------------------------------------------------------
# Main Menu Scene
# -----------------------------------------------------------------
class MainMenu(Scene):
    """Activity picker. ``options`` maps an activity id to extra launch kwargs."""

    def __init__(self, manager, context=None, options=None, on_exit=None):
        super().__init__(manager)
        self.context = context or GameContext()
        self.options = options or {}
        self.on_exit = on_exit
        self.screen = manager.screen
        self.w, self.h = manager.size
        self.font_title, self.font_btn, self.font_small = load_fonts()

        bw, bh, gap = 280, 56, 16
        labels = list(ACTIVITIES) + [(None, "Exit")]
        top = self.h // 2 - (bh * len(labels) + gap * (len(labels) - 1)) // 2
        self.buttons = []
        for i, (key, label) in enumerate(labels):
            rect = (self.w // 2 - bw // 2, top + i * (bh + gap), bw, bh)
            self.buttons.append(Button(rect, label, self.font_btn, key))
        self.selected = 0
        self.buttons[0].hover = True

        self.fade_alpha = 255
        self.fade_dir = -1

    def build(self, visualizer_id):
        mod = load_visualizer_module(visualizer_id)
        if mod is None or not hasattr(mod, "launch"):
            log.warning("no launchable visualizer %r", visualizer_id)
            return None
        return mod.launch(self.manager, self.context, self._on_activity_exit, **self.options.get(visualizer_id, {}))

    def open(self, visualizer_id):
        scene = self.build(visualizer_id)
        if scene is None:
            return None
        self.manager.push(scene)
        log.info("opened %s", visualizer_id)
        return scene

    def _on_activity_exit(self, ctx):
        if self.on_exit:
            self.on_exit(ctx)

    def _press(self, button):
        if button.key is None:
            pygame.event.post(pygame.event.Event(pygame.QUIT))
        else:
            self.open(button.key)

    def _select(self, index):
        self.selected = index % len(self.buttons)
        for i, b in enumerate(self.buttons):
            b.hover = i == self.selected

    def handle_event(self, event):
        if event.type == pygame.MOUSEMOTION:
            for i, b in enumerate(self.buttons):
                if b.hit(event.pos):
                    self._select(i)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            for b in self.buttons:
                if b.hit(event.pos):
                    self._press(b)
                    break
        elif event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_UP, pygame.K_w):
                self._select(self.selected - 1)
            elif event.key in (pygame.K_DOWN, pygame.K_s):
                self._select(self.selected + 1)
            elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
                self._press(self.buttons[self.selected])
            elif event.key == pygame.K_ESCAPE:
                pygame.event.post(pygame.event.Event(pygame.QUIT))

    def update(self, dt):
        self.fade_alpha += self.fade_dir * FADE_SPEED * dt
        self.fade_alpha = max(0, min(255, self.fade_alpha))

    def draw(self):
        self.screen.fill(PALETTE["background"])
        title = self.font_title.render("LCM Game", True, PALETTE["title"])
        self.screen.blit(title, title.get_rect(center=(self.w // 2, 60)))
        sub = self.font_small.render("Least Common Multiple made visual", True, PALETTE["muted"])
        self.screen.blit(sub, sub.get_rect(center=(self.w // 2, 96)))

        for b in self.buttons:
            b.draw(self.screen)

        hint = self.font_small.render("Up/Down to choose, Enter to open, Esc to quit", True, PALETTE["muted"])
        self.screen.blit(hint, hint.get_rect(center=(self.w // 2, self.h - 40)))

        if self.fade_alpha > 0:
            fade = pygame.Surface((self.w, self.h))
            fade.fill((0, 0, 0))
            fade.set_alpha(int(self.fade_alpha))
            self.screen.blit(fade, (0, 0))
