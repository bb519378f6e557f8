"""
SIR transitions applied on top of the physics step.

All randomness comes from the ``rng`` argument (the model's seeded
``random.Random``), never from module-level state.
"""
import logging
from enum import Enum

logger = logging.getLogger(__name__)

DIED = "died"
RECOVERED = "recovered"


class Status(Enum):
    SUSCEPTIBLE = "S"
    INFECTED = "I"
    RECOVERED = "R"
    VACCINATED = "V"  # reserved, never assigned by the transitions below


def transmit(a1, a2, reinfection_probability: float, rng, tick: int = 0):
    """
    Possibly infect the healthy member of a pair with exactly one infected agent.

    Returns the newly infected agent, or None.
    """
    i1 = a1.status is Status.INFECTED
    i2 = a2.status is Status.INFECTED
    if i1 == i2:
        return None
    infected, healthy = (a1, a2) if i1 else (a2, a1)
    if healthy.status not in (Status.SUSCEPTIBLE, Status.RECOVERED):
        return None

    if rng.random() > infected.beta:
        return None
    if healthy.status is Status.RECOVERED and rng.random() > reinfection_probability:
        return None

    healthy.infect(tick)
    logger.debug("tick %d: agent %s infected agent %s", tick, infected.unique_id, healthy.unique_id)
    return healthy


def progress_infection(agent, tick: int) -> None:
    """One more day for agents infected before this tick."""
    if agent.status is Status.INFECTED and agent.infected_tick < tick:
        agent.days_infected += 1


def recover_or_die(agent, death_rate: float, infection_period: int, rng):
    """Return DIED, RECOVERED, or None when the infection is not over yet."""
    if agent.status is not Status.INFECTED or agent.days_infected < infection_period:
        return None
    if rng.random() <= death_rate:
        return DIED
    agent.status = Status.RECOVERED
    agent.days_infected = 0
    return RECOVERED
