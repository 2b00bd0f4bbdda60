"""Buttons and number tiles drawn by every visualizer scene."""

import pygame

from content_registry import PALETTE


def draw_button(surface, rect, label, font, enabled=True):
    fill = PALETTE["button"] if enabled else PALETTE["button_off"]
    pygame.draw.rect(surface, fill, rect, border_radius=8)
    txt = font.render(label, True, PALETTE["text"] if enabled else PALETTE["muted"])
    surface.blit(txt, txt.get_rect(center=rect.center))


def draw_tile(surface, rect, label, font, fill, text_color=None, outline=None):
    pygame.draw.rect(surface, fill, rect, border_radius=6)
    if outline is not None:
        pygame.draw.rect(surface, outline, rect, 2, border_radius=6)
    txt = font.render(str(label), True, text_color or PALETTE["panel_text"])
    surface.blit(txt, txt.get_rect(center=rect.center))


def grid_rects(area, count, columns, cell=(44, 36), gap=8):
    """``count`` cells laid out left to right, top to bottom, centred in ``area``."""
    area = pygame.Rect(area)
    columns = max(1, min(columns, count)) if count else 1
    cw, ch = cell
    row_w = columns * cw + (columns - 1) * gap
    left = area.centerx - row_w // 2
    rects = []
    for i in range(count):
        row, col = divmod(i, columns)
        rects.append(pygame.Rect(left + col * (cw + gap), area.top + row * (ch + gap), cw, ch))
    return rects
