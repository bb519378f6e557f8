"""
Agent movement and pairwise collision response on the unit torus.

Collisions change velocities only; positions advance on the next move.
"""
import math
from typing import Iterable

import numpy as np

from .utils import EXTENT, min_image_delta, wrap_position

# ---------------- Movement ----------------

def move(agent, dt: float) -> None:
    """Advance pos by vel*dt and wrap onto the torus. Infinite-mass agents stay put."""
    if agent.pos is None or math.isinf(agent.mass):
        return
    vx, vy = float(agent.vel[0]), float(agent.vel[1])
    if vx == 0.0 and vy == 0.0:
        return
    x = float(agent.pos[0]) + vx * dt
    y = float(agent.pos[1]) + vy * dt
    agent.model.space.move_agent(agent, wrap_position((x, y), agent.model.space.width))


# ---------------- Collisions ----------------

def elastic_collision(a1, a2, extent: float = EXTENT) -> bool:
    """
    Resolve an elastic collision along the line of centres.

    Only velocities change. An infinite-mass agent acts as a fixed wall and
    the other agent is reflected off it; two infinite masses do nothing.
    Pairs that are not approaching each other are left alone so a single
    contact spanning several ticks is not resolved twice.
    Returns True if velocities were updated.
    """
    m1, m2 = float(a1.mass), float(a2.mass)
    if math.isinf(m1) and math.isinf(m2):
        return False
    dx, dy = min_image_delta(a1.pos, a2.pos, extent)
    r2 = np.array([dx, dy], dtype=float)  # a1 -> a2
    r1 = -r2
    n2 = float(r2 @ r2)
    if n2 == 0.0:
        return False
    v1 = np.asarray(a1.vel, dtype=float)
    v2 = np.asarray(a2.vel, dtype=float)

    if math.isinf(m1):
        if float(r1 @ v2) <= 0.0:
            return False
        a2.vel = v2 - 2.0 * (float(v2 @ r1) / n2) * r1
        return True
    if math.isinf(m2):
        if float(r2 @ v1) <= 0.0:
            return False
        a1.vel = v1 - 2.0 * (float(v1 @ r2) / n2) * r2
        return True

    if float((v1 - v2) @ r2) <= 0.0:
        return False
    f1 = 2.0 * m2 / (m1 + m2)
    f2 = 2.0 * m1 / (m1 + m2)
    a1.vel = v1 - f1 * (float((v1 - v2) @ r1) / n2) * r1
    a2.vel = v2 - f2 * (float((v2 - v1) @ r2) / n2) * r2
    return True


# ---------------- Diagnostics ----------------

def kinetic_energy(agents: Iterable) -> float:
    """Total kinetic energy of the finite-mass agents."""
    total = 0.0
    for a in agents:
        if math.isinf(a.mass):
            continue
        v = np.asarray(a.vel, dtype=float)
        total += 0.5 * float(a.mass) * float(v @ v)
    return total


def momentum(agents: Iterable) -> np.ndarray:
    """Total momentum vector of the finite-mass agents."""
    total = np.zeros(2, dtype=float)
    for a in agents:
        if math.isinf(a.mass):
            continue
        total += float(a.mass) * np.asarray(a.vel, dtype=float)
    return total
