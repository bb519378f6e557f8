"""
Proximity queries on the periodic unit square.

Distances use the minimum-image convention, which equals the minimum over
the nine toroidal images. A dense numpy distance matrix is built per query;
that is quick enough for a few hundred agents.
"""
from typing import List, Sequence, Tuple

import numpy as np

from .config import PAIRING_METHODS
from .utils import EXTENT


class InteractionIndex:
    def __init__(self, extent: float = EXTENT, torus: bool = True):
        self.extent = float(extent)
        self.torus = bool(torus)

    # ---------------- Geometry ----------------
    def deltas(self, positions: np.ndarray) -> np.ndarray:
        """(n, n, 2) array of displacement vectors i -> j."""
        d = positions[None, :, :] - positions[:, None, :]
        if self.torus:
            half = self.extent / 2.0
            d = (d + half) % self.extent - half
        return d

    def distance_matrix(self, positions) -> np.ndarray:
        pts = np.asarray(positions, dtype=float).reshape(-1, 2)
        d = self.deltas(pts)
        return np.hypot(d[..., 0], d[..., 1])

    # ---------------- Queries ----------------
    def pairs(self, ids: Sequence[int], positions, radius: float,
              method: str = "nearest") -> List[Tuple[int, int]]:
        """
        Interacting id pairs for this tick, each as (lower_id, higher_id).

        "nearest": every agent proposes its closest neighbour within radius;
        proposals are accepted by ascending distance (then ids), skipping any
        that involve an already paired agent. "all": every pair within radius.
        """
        if method not in PAIRING_METHODS:
            raise ValueError(f"unknown pairing method {method!r}; expected one of {PAIRING_METHODS}")
        n = len(ids)
        if n < 2:
            return []
        ids_arr = np.asarray(ids, dtype=int)
        dist = self.distance_matrix(positions)
        np.fill_diagonal(dist, np.inf)
        dist[dist > radius] = np.inf

        if method == "all":
            ii, jj = np.nonzero(np.isfinite(dist))
            out = set()
            for i, j in zip(ii, jj):
                a, b = int(ids_arr[i]), int(ids_arr[j])
                out.add((a, b) if a < b else (b, a))
            return sorted(out)

        # argmin returns the lowest index on ties, which keeps runs reproducible
        nearest = np.argmin(dist, axis=1)
        proposals = {}
        for i in range(n):
            j = int(nearest[i])
            d = dist[i, j]
            if not np.isfinite(d):
                continue
            a, b = int(ids_arr[i]), int(ids_arr[j])
            key = (a, b) if a < b else (b, a)
            proposals[key] = float(d)

        paired = set()
        out = []
        for (a, b), _d in sorted(proposals.items(), key=lambda kv: (kv[1], kv[0])):
            if a in paired or b in paired:
                continue
            paired.add(a)
            paired.add(b)
            out.append((a, b))
        return out
