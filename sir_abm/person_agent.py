import math
from collections import namedtuple

from mesa import Agent
import numpy as np

from .epidemic import Status

AgentSnapshot = namedtuple("AgentSnapshot", ["id", "position", "status"])


class PersonAgent(Agent):
    """
    Point-mass agent on the unit torus carrying an optional infection.

    Isolated agents get infinite mass and zero velocity; collisions treat
    them as fixed walls.
    """
    def __init__(self, model, vel=(0.0, 0.0), mass=1.0, status=Status.SUSCEPTIBLE,
                 beta=1.0, isolated=False):
        # Mesa 3: pass only the model; unique_id auto-assigned
        super().__init__(model)
        self.isolated = bool(isolated)
        self.mass = math.inf if self.isolated else float(mass)
        self.vel = np.zeros(2, dtype=float) if math.isinf(self.mass) else np.asarray(vel, dtype=float)
        self.status = status
        self.beta = float(beta)
        self.days_infected = 0
        self.infected_tick = 0
        self.times_infected = 1 if status is Status.INFECTED else 0
        # self.pos is set when placed in space

    def infect(self, tick: int) -> None:
        self.status = Status.INFECTED
        self.days_infected = 0
        self.infected_tick = int(tick)
        self.times_infected += 1

    def snapshot(self) -> AgentSnapshot:
        pos = None if self.pos is None else (float(self.pos[0]), float(self.pos[1]))
        return AgentSnapshot(int(self.unique_id), pos, self.status)

    def __repr__(self):
        return f"PersonAgent(id={self.unique_id}, status={self.status.name}, pos={self.pos})"
