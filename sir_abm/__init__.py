# Spatial SIR agent-based model on the periodic unit square
from .config import DEFAULTS, SIRConfig, load_config, save_config
from .epidemic import Status
from .errors import EmptyPopulation, InvalidConfig, SimulationError
from .person_agent import AgentSnapshot, PersonAgent
from .sir_model import SIRModel, TickCounts, initialize, run, step
from .spatial import InteractionIndex

__all__ = [
    'DEFAULTS',
    'SIRConfig',
    'load_config',
    'save_config',
    'Status',
    'EmptyPopulation',
    'InvalidConfig',
    'SimulationError',
    'AgentSnapshot',
    'PersonAgent',
    'SIRModel',
    'TickCounts',
    'initialize',
    'run',
    'step',
    'InteractionIndex',
]
