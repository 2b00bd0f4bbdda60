"""Headless stand-ins for the scene manager plus synthetic input helpers."""

import pygame


class FakeManager:
    def __init__(self, size=(960, 640)):
        pygame.init()
        self.screen = pygame.display.set_mode(size)
        self.size = self.screen.get_size()
        self.scenes = []
        self.popped = 0

    def push(self, scene):
        self.scenes.append(scene)

    def pop(self):
        self.popped += 1
        if self.scenes:
            self.scenes.pop()


def click(scene, pos):
    scene.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=pos))
    scene.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=pos))


def press(scene, key, unicode=""):
    scene.handle_event(pygame.event.Event(pygame.KEYDOWN, key=key, unicode=unicode, mod=0))


def type_text(scene, text):
    for ch in text:
        press(scene, pygame.K_UNKNOWN, ch)


def frame(scene, dt=0.016):
    scene.update(dt)
    scene.draw()
