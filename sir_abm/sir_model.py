import logging
import math
from collections import namedtuple

from mesa import Model
from mesa.space import ContinuousSpace
import numpy as np

from .config import as_config
from .epidemic import DIED, Status, progress_infection, recover_or_die, transmit
from .errors import EmptyPopulation
from .person_agent import PersonAgent
from .physics import elastic_collision, move
from .spatial import InteractionIndex
from .utils import EXTENT

logger = logging.getLogger(__name__)

TickCounts = namedtuple("TickCounts", ["tick", "susceptible", "infected", "recovered", "dead"])


class SIRModel(Model):
    """
    Agents moving on the periodic unit square, bouncing elastically off their
    nearest contact and, when ``config.epidemic`` is set, passing an SIR
    infection across those contacts.

    Tick order: move every agent; for each interacting pair (computed once,
    after moving) transmit then collide; for each agent progress the infection
    and recover or die; remove the dead; log counts.
    count_log[0] is the initial state, count_log[k] the state after tick k.
    """
    def __init__(self, config=None, **overrides):
        cfg = as_config(config, **overrides).validate()
        super().__init__()
        self.random.seed(cfg.seed)
        self.config = cfg

        # Space
        self.space = ContinuousSpace(x_max=EXTENT, y_max=EXTENT, torus=True)
        self.index = InteractionIndex(extent=EXTENT, torus=True)

        # Time
        self.dt = float(cfg.dt)
        self.tick = 0

        self.dead = 0
        self.ever_infected = set()
        self.collisions = 0
        self._extinct_logged = False

        self._populate()

        self.count_log = []
        self._log_state()  # t=0 snapshot
        logger.info(
            "initialised %d agents (%d infected, %d isolated), seed=%s",
            cfg.n_agents, self.counts().infected,
            sum(1 for a in self.agents if a.isolated), cfg.seed,
        )

    # ---------------- Population ----------------
    def _populate(self):
        cfg = self.config
        n_isolated = cfg.isolated * cfg.n_agents
        for ind in range(cfg.n_agents):
            isolated = ind < n_isolated
            infected = ind >= cfg.n_agents - cfg.initial_infected
            x, y = self.random.random(), self.random.random()
            if isolated:
                vel = (0.0, 0.0)
            else:
                theta = 2.0 * math.pi * self.random.random()
                vel = (math.cos(theta) * cfg.speed, math.sin(theta) * cfg.speed)
            beta = (cfg.beta_max - cfg.beta_min) * self.random.random() + cfg.beta_min
            a = PersonAgent(
                model=self,
                vel=vel,
                mass=cfg.mass,
                status=Status.INFECTED if infected else Status.SUSCEPTIBLE,
                beta=beta,
                isolated=isolated,
            )
            self.space.place_agent(a, (x, y))
            if infected:
                self.ever_infected.add(a.unique_id)

    def remove_person(self, agent):
        self.space.remove_agent(agent)
        agent.remove()
        self.dead += 1

    @property
    def population(self) -> int:
        return len(self.agents)

    @property
    def cumulative_infected(self) -> int:
        """Distinct agents infected at least once, the dead included."""
        return len(self.ever_infected)

    def snapshots(self):
        return [a.snapshot() for a in self.agents]

    # ---------------- Interactions ----------------
    def interacting_pairs(self, agents=None):
        agents = list(self.agents) if agents is None else agents
        by_id = {a.unique_id: a for a in agents}
        ids = [a.unique_id for a in agents]
        positions = np.array([a.pos for a in agents], dtype=float).reshape(-1, 2)
        pairs = self.index.pairs(
            ids, positions, self.config.interaction_radius, method=self.config.interaction_method
        )
        return [(by_id[i], by_id[j]) for i, j in pairs]

    # ---------------- Logging ----------------
    def counts(self) -> TickCounts:
        s = i = r = 0
        for a in self.agents:
            if a.status is Status.SUSCEPTIBLE:
                s += 1
            elif a.status is Status.INFECTED:
                i += 1
            elif a.status is Status.RECOVERED:
                r += 1
        return TickCounts(self.tick, s, i, r, self.dead)

    def _log_state(self):
        self.count_log.append(self.counts())

    # ---------------- Step ----------------
    def step(self):
        cfg = self.config
        self.tick += 1
        agents = list(self.agents)

        for a in agents:
            move(a, self.dt)

        for a1, a2 in self.interacting_pairs(agents):
            if cfg.epidemic:
                newly = transmit(a1, a2, cfg.reinfection_probability, self.random, tick=self.tick)
                if newly is not None:
                    self.ever_infected.add(newly.unique_id)
            if elastic_collision(a1, a2):
                self.collisions += 1

        if cfg.epidemic:
            died = []
            for a in agents:
                progress_infection(a, self.tick)
                if recover_or_die(a, cfg.death_rate, cfg.infection_period, self.random) == DIED:
                    died.append(a)
            for a in died:
                logger.debug("tick %d: agent %s died", self.tick, a.unique_id)
                self.remove_person(a)

        self._log_state()
        if not self.agents and not self._extinct_logged:
            logger.warning("population extinct at tick %d", self.tick)
            self._extinct_logged = True

    def run(self, n_ticks: int, strict: bool = False):
        """
        Execute up to n_ticks ticks and return their TickCounts rows.

        Stops early at a tick boundary if ``self.running`` is cleared. With
        strict=True an extinct population raises EmptyPopulation; otherwise
        zero-count rows keep being produced.
        """
        rows = []
        for _ in range(int(n_ticks)):
            if not self.running:
                logger.info("run stopped at tick %d", self.tick)
                break
            self.step()
            row = self.count_log[-1]
            rows.append(row)
            if strict and row.susceptible + row.infected + row.recovered == 0:
                raise EmptyPopulation(self.tick)
        logger.info("ran %d ticks, now at tick %d: %s", len(rows), self.tick, self.count_log[-1])
        return rows


# ---------------- Functional entry points ----------------

def initialize(config=None, **overrides) -> SIRModel:
    return SIRModel(config, **overrides)


def step(model: SIRModel) -> TickCounts:
    model.step()
    return model.count_log[-1]


def run(model: SIRModel, n_ticks: int, strict: bool = False):
    return model.run(n_ticks, strict=strict)
