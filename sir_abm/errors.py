class SimulationError(Exception):
    """Base class for SIR ABM errors."""


class InvalidConfig(SimulationError, ValueError):
    """Raised when a configuration is out of range or inconsistent."""

    def __init__(self, problems):
        if isinstance(problems, str):
            problems = [problems]
        self.problems = list(problems)
        super().__init__("invalid configuration: " + "; ".join(self.problems))


class EmptyPopulation(SimulationError):
    """Raised by strict runs once every agent has died."""

    def __init__(self, tick):
        self.tick = int(tick)
        super().__init__(f"population extinct at tick {self.tick}")
