import pygame
from functools import lru_cache
from typing import Tuple


@lru_cache(maxsize=16)
def _font(size: int) -> pygame.font.Font:
    return pygame.font.SysFont(None, size)


def draw_text(surface: pygame.Surface, text: str, pos: Tuple[int, int], color=(230, 230, 230), size=24):
    surface.blit(_font(size).render(text, True, color), pos)


def draw_text_centered(surface: pygame.Surface, text: str, center: Tuple[int, int], color=(230, 230, 230), size=24) -> pygame.Rect:
    img = _font(size).render(text, True, color)
    rect = img.get_rect(center=center)
    surface.blit(img, rect)
    return rect


def draw_lines_centered(surface: pygame.Surface, text: str, center: Tuple[int, int], color=(230, 230, 230), size=24, spacing=6):
    """Multi-line text, each line centered, the block centered on `center`."""
    lines = text.split("\n")
    line_h = _font(size).get_linesize() + spacing
    top = center[1] - (line_h * len(lines)) // 2 + line_h // 2
    for i, line in enumerate(lines):
        draw_text_centered(surface, line, (center[0], top + i * line_h), color, size)


def draw_button(surface: pygame.Surface, rect: pygame.Rect, label: str, color=(230, 230, 230), size=32, fill=None):
    if fill is not None:
        pygame.draw.rect(surface, fill, rect, border_radius=12)
    pygame.draw.rect(surface, color, rect, width=3, border_radius=12)
    draw_text_centered(surface, label, rect.center, color, size)
