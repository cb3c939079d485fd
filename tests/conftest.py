from __future__ import annotations

import os

# headless pygame: must be set before sweepradar.constants imports pygame
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
