import logging

import pygame

log = logging.getLogger(__name__)

PALETTE = {
    "background": (14, 22, 36),
    "title": (250, 204, 21),
    "text": (255, 255, 255),
    "muted": (160, 170, 185),
    "tip": (15, 59, 102),
    "tip_bg": (235, 242, 250),
    "error": (220, 38, 38),
    "primary": (59, 130, 246),
    "secondary": (34, 197, 94),
    "stack_bg": (244, 248, 251),
    "outline": (209, 213, 219),
    "bridge": (121, 85, 72),
    "bridge_light": (161, 136, 127),
    "bridge_slat": (188, 170, 164),
    "handle": (255, 235, 140),
    "skin": (255, 215, 175),
    "shirt": (78, 177, 201),
    "trousers": (81, 96, 111),
    "shoe": (47, 47, 47),
    "button": (14, 165, 233),
    "button_off": (60, 72, 90),
    "panel": (255, 255, 255),
    "panel_text": (2, 62, 138),
    "tile": (243, 244, 246),
    "tile_hidden": (55, 65, 81),
    "tile_current": (219, 234, 254),
    "selected": (34, 197, 94),
    "common": (251, 146, 60),
    "success": (96, 210, 120),
}


def load_fonts():
    """Return (big, medium, small) default fonts."""
    if not pygame.font.get_init():
        pygame.font.init()

    try:
        big = pygame.font.Font(None, 42)
        medium = pygame.font.Font(None, 28)
        small = pygame.font.Font(None, 20)
        return big, medium, small
    except (pygame.error, OSError) as e:
        log.warning("default font unavailable, falling back: %s", e)
        f = pygame.font.SysFont(None, 24)
        return f, f, f
