import logging

import pygame

log = logging.getLogger(__name__)


class Scene:
    """Base scene with no-op event/update/draw hooks."""

    def __init__(self, manager):
        self.manager = manager

    def handle_event(self, event):
        pass

    def update(self, dt):
        pass

    def draw(self):
        pass


class SceneManager:
    """Controls scene stack and main loop."""

    def __init__(self, first_scene_factory, size=(960, 640), caption="LCM Finder", context=None):
        pygame.init()
        self.screen = pygame.display.set_mode(size)
        self.size = self.screen.get_size()
        pygame.display.set_caption(caption)
        self.clock = pygame.time.Clock()
        self.running = True
        self.scenes = []
        self.context = context

        if callable(first_scene_factory):
            self.scenes.append(first_scene_factory(self))
        else:
            raise ValueError("First scene must be a class or factory.")

    def push(self, scene):
        self.scenes.append(scene)

    def pop(self):
        if self.scenes:
            self.scenes.pop()
        if not self.scenes:
            self.running = False

    def run(self):
        """Main loop."""
        while self.running:
            dt = self.clock.tick(60) / 1000.0
            if not self.scenes:
                break
            current = self.scenes[-1]

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    break
                try:
                    current.handle_event(event)
                except Exception:
                    log.exception("event handler failed in %s", type(current).__name__)

            if self.context is not None:
                self.context.add_playtime(dt)
            try:
                current.update(dt)
                current.draw()
            except Exception:
                log.exception("frame failed in %s", type(current).__name__)

            pygame.display.flip()

        pygame.quit()
