"""Per-frame layout (the measuring side of the engine) and pygame drawing."""

import pygame

from content_registry import PALETTE
from .geometry import BoundingBox, ElementId
from .stacks import Actor

STACK_W = 80
COLUMN_OFFSET = 110  # column centers sit this far either side of the middle
AVATAR_SIZE = {
    Actor.PRIMARY: (90, 130),
    Actor.SECONDARY: (70, 95),
}
RESTING_SON_SIZE = (56, 76)
AVATAR_GAP = 8
FOOTER_H = 92  # label, total and add button under each stack
TIP_H = 44
BUTTON_SIZE = (170, 34)
HANDLE_W = 16

BLOCK_COLORS = {
    Actor.PRIMARY: PALETTE["primary"],
    Actor.SECONDARY: PALETTE["secondary"],
}
LABELS = {
    Actor.PRIMARY: "Father",
    Actor.SECONDARY: "Son",
}


class RenderedLayout:
    """Lays the scene out once per frame and answers ``measure`` from the rects it produced."""

    def __init__(self, container: pygame.Rect):
        self.container = pygame.Rect(container)
        self.rects = {}
        self.buttons = {}
        self.scroll = {actor: 0 for actor in Actor}

    def measure(self, element_id):
        rect = self.rects.get(element_id)
        if rect is None:
            return None
        return BoundingBox.from_rect(rect)

    def update(self, engine):
        c = self.container
        base_y = c.bottom - FOOTER_H
        rects = {ElementId.CONTAINER: c.copy()}
        buttons = {}
        for actor, sign in ((Actor.PRIMARY, -1), (Actor.SECONDARY, 1)):
            cx = c.centerx + sign * COLUMN_OFFSET
            aw, ah = AVATAR_SIZE[actor]
            max_view = max(engine.config.initial_stack_height, base_y - c.top - TIP_H - ah - AVATAR_GAP)
            content_h = engine.model.display_height_of(actor)
            view_h = min(content_h, max_view)
            # Newest block stays in view once the stack outgrows the column.
            self.scroll[actor] = content_h - view_h

            stack = pygame.Rect(0, 0, STACK_W, view_h)
            stack.midbottom = (cx, base_y)
            avatar = pygame.Rect(0, 0, aw, ah)
            avatar.midbottom = (cx, stack.top - AVATAR_GAP)
            button = pygame.Rect(0, 0, *BUTTON_SIZE)
            button.midtop = (cx, base_y + 48)

            key = "primary" if actor is Actor.PRIMARY else "secondary"
            rects[f"{key}_stack"] = stack
            rects[f"{key}_avatar"] = avatar
            rects[f"{key}_section"] = avatar.union(stack).union(button)
            buttons[f"add_{key}"] = button

        bridge_btn = pygame.Rect(0, 0, 130, BUTTON_SIZE[1])
        bridge_btn.bottomright = (c.right - 12, c.bottom - 12)
        walk_btn = pygame.Rect(0, 0, 130, BUTTON_SIZE[1])
        walk_btn.bottomleft = (c.left + 12, c.bottom - 12)
        buttons["bridge"] = bridge_btn
        buttons["walk"] = walk_btn

        span = engine.span
        if span is not None and span.editable:
            top = self.bridge_rect(span, engine.config.bridge_thickness).top
            h = engine.config.bridge_thickness + 12
            buttons["handle_left"] = pygame.Rect(c.left + span.left - HANDLE_W // 2, top - 6, HANDLE_W, h)
            buttons["handle_right"] = pygame.Rect(c.left + span.right - HANDLE_W // 2, top - 6, HANDLE_W, h)

        self.rects = rects
        self.buttons = buttons

    def bridge_rect(self, span, thickness):
        c = self.container
        return pygame.Rect(
            round(c.left + span.left),
            round(c.bottom - span.vertical_offset - thickness),
            max(1, round(span.width)),
            thickness,
        )

    def walker_rect(self, left, offset):
        w, h = AVATAR_SIZE[Actor.SECONDARY]
        c = self.container
        return pygame.Rect(round(c.left + left), round(c.bottom - offset - h), w, h)

    def resting_rect(self, position):
        section = self.rects.get(ElementId.PRIMARY_SECTION)
        if section is None:
            return None
        left, bottom = position
        w, h = RESTING_SON_SIZE
        return pygame.Rect(round(section.left + left), round(section.bottom - bottom - h), w, h)

    def hit(self, pos):
        for name, rect in self.buttons.items():
            if rect.collidepoint(pos):
                return name
        return None


# -----------------------------------------------------
#   Drawing
# -----------------------------------------------------
def draw_stack(surface, rect, blocks, scale, gap, color, font, scroll=0):
    """Oldest block at the bottom; ``scroll`` px of the bottom are pushed out of view."""
    pygame.draw.rect(surface, PALETTE["stack_bg"], rect, border_radius=8)
    prev_clip = surface.get_clip()
    surface.set_clip(rect)
    y = rect.bottom + scroll
    for size in blocks:
        h = size * scale
        block = pygame.Rect(rect.left + 2, y - h, rect.width - 4, h)
        pygame.draw.rect(surface, color, block, border_radius=4)
        if h >= 14:
            txt = font.render(str(size), True, PALETTE["text"])
            surface.blit(txt, txt.get_rect(center=block.center))
        y -= h + gap
    surface.set_clip(prev_clip)
    pygame.draw.rect(surface, PALETTE["outline"], rect, 1, border_radius=8)


def draw_bridge(surface, rect, handles=None):
    pygame.draw.rect(surface, PALETTE["bridge"], rect, border_radius=8)
    top = pygame.Rect(rect.left, rect.top, rect.width, max(2, rect.height // 12))
    pygame.draw.rect(surface, PALETTE["bridge_light"], top, border_radius=4)
    slat_w = 6
    for i in range(4):
        x = rect.left + int(rect.width * (0.12 + i * 0.22))
        slat = pygame.Rect(x, rect.top + rect.height // 10, slat_w, rect.height * 8 // 10)
        pygame.draw.rect(surface, PALETTE["bridge_slat"], slat, border_radius=3)
    for handle in handles or ():
        pygame.draw.rect(surface, PALETTE["handle"], handle, 2, border_radius=4)


def draw_avatar(surface, rect, shirt):
    """Head, cap, body and legs scaled into ``rect``."""
    w, h = rect.size
    head_r = max(4, int(w * 0.2))
    head = (rect.centerx, rect.top + int(h * 0.24))
    pygame.draw.circle(surface, PALETTE["skin"], head, head_r)
    cap = pygame.Rect(0, 0, int(w * 0.48), int(h * 0.14))
    cap.midbottom = (head[0], head[1] - head_r // 3)
    pygame.draw.ellipse(surface, shirt, cap)
    body = pygame.Rect(0, 0, int(w * 0.34), int(h * 0.24))
    body.midtop = (rect.centerx, head[1] + head_r + 2)
    pygame.draw.rect(surface, shirt, body, border_radius=6)
    leg_w = max(3, int(w * 0.09))
    for dx in (-leg_w, leg_w // 2):
        leg = pygame.Rect(rect.centerx + dx - leg_w // 2, body.bottom, leg_w, rect.bottom - body.bottom - 4)
        pygame.draw.rect(surface, PALETTE["trousers"], leg, border_radius=3)
        shoe = pygame.Rect(leg.left - 2, rect.bottom - 5, leg_w + 4, 5)
        pygame.draw.rect(surface, PALETTE["shoe"], shoe, border_radius=2)

