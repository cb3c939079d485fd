"""
Hard-coded colours, geometry & fonts so every module can import them
without circular dependencies.
"""
from pathlib import Path
import pygame

# -------- colours --------
GREEN, DIM, BLACK, RED = (0, 255, 0), (0, 90, 0), (0, 0, 0), (255, 0, 0)
NEAR, FAR = RED, GREEN                  # distance colour ramp end-points
NIGHT_TINT = (255, 0, 0, 120)

# -------- scope geometry --------
RANGE_FRACTION = 0.4                    # max-range ring radius / canvas size
RING_STEP_CM   = 100                    # range rings every metre
SPOKE_STEP_DEG = 30
DOT_R          = 4

# -------- fonts --------
pygame.font.init()
FONT       = pygame.font.SysFont("monospace", 18)
SMALL_FONT = pygame.font.SysFont("monospace", 14)
BIG_FONT   = pygame.font.SysFont("monospace", 36)

TITLE = "SWEEP-RADAR"

# -------- dirs --------
ROOT      = Path(__file__).resolve().parent.parent
CFG_PATH  = ROOT / "radar_config.json"
