"""
Colors and an offscreen numpy rasterizer for sessions.

The rasterizer is what ``rgb_array`` rendering returns, so it works without a
window or an OpenGL context.
"""

import numpy as np

from .utils import Rect

BG_C = (18, 18, 22)
PLAYER_C = (60, 90, 220)
NOSE_C = (80, 200, 120)
BULLET_C = (220, 60, 60)
HUD_C = (220, 220, 220)
HINT_C = (128, 128, 128)
GAME_OVER_C = (230, 41, 55)

ENEMY_COLORS = {
    "saucer": (255, 161, 0),
    "dart": (240, 210, 80),
    "brick": (190, 90, 200),
}
DEFAULT_ENEMY_C = ENEMY_COLORS["saucer"]


def _fill(frame: np.ndarray, rect: Rect, color):
    h, w = frame.shape[:2]
    x0 = max(0, int(round(rect.x)))
    y0 = max(0, int(round(rect.y)))
    x1 = min(w, int(round(rect.x + rect.w)))
    y1 = min(h, int(round(rect.y + rect.h)))
    # Fully outside (e.g. enemies still above the top edge)
    if x0 >= x1 or y0 >= y1:
        return
    frame[y0:y1, x0:x1] = color


def rasterize(session) -> np.ndarray:
    """Draw the session as flat rectangles into an (H, W, 3) uint8 array"""
    cfg = session.config
    frame = np.empty((int(cfg.height), int(cfg.width), 3), dtype=np.uint8)
    frame[:] = BG_C

    for e in session.enemies:
        _fill(frame, e.rect, ENEMY_COLORS.get(e.variant, DEFAULT_ENEMY_C))
    for b in session.bullets:
        _fill(frame, b.rect, BULLET_C)
    _fill(frame, session.player.rect, PLAYER_C)

    return frame
