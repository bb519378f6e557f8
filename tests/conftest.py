import numpy as np
import pytest

from sir_abm import SIRModel, Status


class ScriptedRNG:
    """Stand-in for random.Random that replays fixed draws."""

    def __init__(self, draws):
        self.draws = list(draws)
        self.used = 0

    def random(self):
        value = self.draws[self.used]
        self.used += 1
        return value


def place(agent, pos, vel=None, mass=None):
    agent.model.space.move_agent(agent, tuple(pos))
    if mass is not None:
        agent.mass = mass
    if vel is not None:
        agent.vel = np.asarray(vel, dtype=float)
    return agent


def by_id(model):
    return sorted(model.agents, key=lambda a: a.unique_id)


@pytest.fixture
def pair_model():
    """Two stationary agents, one of them infected."""
    return SIRModel(n_agents=2, initial_infected=1, speed=0.0, seed=3)


@pytest.fixture
def pair(pair_model):
    """(infected, susceptible)"""
    return sorted(pair_model.agents, key=lambda a: a.status is not Status.INFECTED)


@pytest.fixture
def small_config():
    return dict(
        n_agents=60,
        initial_infected=3,
        interaction_radius=0.04,
        speed=0.006,
        infection_period=40,
        death_rate=0.1,
        reinfection_probability=0.2,
        seed=11,
    )
