# projection.py
from typing import List, Sequence, Tuple

import numpy as np  # type: ignore

from .config import CELL_SIZE, GRID_SIZE, WIDTH, HEIGHT

ScreenPoint = Tuple[float, float]


def tilt_matrix(degrees: float) -> np.ndarray:
    """
    rotateX as CSS defines it: y points down, z points at the viewer, and a
    positive angle pushes the top edge away.
    """
    a = np.radians(degrees)
    c, s = np.cos(a), np.sin(a)
    return np.array(
        [
            [1.0, 0.0, 0.0],
            [0.0,   c,  -s],
            [0.0,   s,   c],
        ],
        dtype=np.float64,
    )


class BoardProjection:
    """
    Maps board-local pixel coordinates (origin at the board's top-left
    corner, z lifting off the board) to screen pixels.

    The board rotates about its own centre and is seen through a pinhole
    `perspective` pixels in front of it, centred on `center`.
    """

    def __init__(
        self,
        cell_size: int = CELL_SIZE,
        grid_size: int = GRID_SIZE,
        center: Tuple[float, float] = (WIDTH / 2, HEIGHT / 2),
        tilt_deg: float = 55.0,
        perspective: float = 1000.0,
    ):
        self.cell_size = cell_size
        self.grid_size = grid_size
        self.board_px = cell_size * grid_size
        self.center = np.asarray(center, dtype=np.float64)
        self.rotation = tilt_matrix(tilt_deg)
        self.perspective = float(perspective)
        self._origin = np.array([self.board_px / 2, self.board_px / 2, 0.0])

    def project(self, points) -> np.ndarray:
        """(N, 3) board-local points -> (N, 2) screen points."""
        pts = np.atleast_2d(np.asarray(points, dtype=np.float64))
        rotated = (pts - self._origin) @ self.rotation.T
        scale = self.perspective / (self.perspective - rotated[:, 2])
        return self.center + rotated[:, :2] * scale[:, None]

    def _to_list(self, points: np.ndarray) -> List[ScreenPoint]:
        return [(float(x), float(y)) for x, y in points]

    def cell_quad(self, x: int, y: int, lift: float = 0.0) -> List[ScreenPoint]:
        cs = self.cell_size
        corners = [
            (x * cs, y * cs, lift),
            ((x + 1) * cs, y * cs, lift),
            ((x + 1) * cs, (y + 1) * cs, lift),
            (x * cs, (y + 1) * cs, lift),
        ]
        return self._to_list(self.project(corners))

    def cell_center(self, x: int, y: int, lift: float = 0.0) -> ScreenPoint:
        cs = self.cell_size
        sx, sy = self.project([((x + 0.5) * cs, (y + 0.5) * cs, lift)])[0]
        return (float(sx), float(sy))

    def board_quad(self) -> List[ScreenPoint]:
        n = self.board_px
        return self._to_list(self.project([(0, 0, 0), (n, 0, 0), (n, n, 0), (0, n, 0)]))

    def grid_lines(self) -> List[Tuple[ScreenPoint, ScreenPoint]]:
        """Screen-space segments for every inner grid line."""
        n = self.board_px
        ticks = np.arange(1, self.grid_size) * self.cell_size
        ends: List[Sequence[float]] = []
        for t in ticks:
            ends += [(t, 0, 0), (t, n, 0), (0, t, 0), (n, t, 0)]
        if not ends:
            return []
        flat = self._to_list(self.project(ends))
        return list(zip(flat[0::2], flat[1::2]))
