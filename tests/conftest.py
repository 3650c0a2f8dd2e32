from __future__ import annotations

import os

# pygame must never try to open a real window or audio device under test
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame  # noqa: E402
import pytest  # noqa: E402


@pytest.fixture
def pygame_ready():
    pygame.init()
    yield
    pygame.quit()
