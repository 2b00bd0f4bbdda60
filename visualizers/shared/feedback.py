"""Short-lived answer feedback strip shown after a quiz submission."""

from __future__ import annotations

import pygame

DEFAULT_TEXT = {
    True: "Correct!",
    False: "Wrong! Correct answer: {answer}",
}

COLORS = {
    True: (96, 210, 120),
    False: (235, 90, 90),
}


class FeedbackBanner:
    def __init__(self, duration: float = 1.0, texts: dict | None = None):
        self.duration = duration
        self.texts = {**DEFAULT_TEXT, **(texts or {})}
        self.active = False
        self.timer = 0.0
        self.passed = None
        self.text = ""

    def show(self, passed: bool, answer=None):
        self.passed = bool(passed)
        self.text = self.texts[self.passed].format(answer=answer)
        self.timer = self.duration
        self.active = True

    def cancel(self):
        self.active = False
        self.timer = 0.0
        self.text = ""

    def update(self, dt: float) -> bool:
        """Tick the countdown; True on the frame the banner expires."""
        if not self.active:
            return False
        self.timer -= dt
        if self.timer <= 0:
            self.cancel()
            return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font, center: tuple[int, int]):
        if not self.active:
            return
        surf = font.render(self.text, True, COLORS[self.passed])
        rect = surf.get_rect(center=center)
        backdrop = pygame.Surface(rect.inflate(24, 12).size, pygame.SRCALPHA)
        backdrop.fill((0, 0, 0, 150))
        screen.blit(backdrop, rect.inflate(24, 12).topleft)
        screen.blit(surf, rect)
