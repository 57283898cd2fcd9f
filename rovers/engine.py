import time

from config import load_config
from core.errors import HealthCheckError
from internal.logging import get_logger
from rovers.entities import Rover
from rovers.parser import parse_input

SELF_CHECK_INPUT = "5 5\n1 2 N\nLMLMLMLMM\n3 3 E\nMMRMMRMRRM"
SELF_CHECK_EXPECTED = ["1 3 N", "5 1 E"]


def drive(plateau, start, instructions):
    rover = Rover.from_state(start)
    for instruction in instructions:
        rover.execute(instruction, plateau)
    return rover


def simulate_rover(plateau, start, instructions):
    """Apply instructions in order and return the final RoverState."""
    return drive(plateau, start, instructions).to_state()


class RoverOutcome:
    __slots__ = ("start", "final", "instructions", "blocked")

    def __init__(self, start, final, instructions, blocked=0):
        self.start, self.final, self.instructions, self.blocked = start, final, instructions, blocked

    def to_dict(self):
        return {
            "start": self.start.to_dict(),
            "final": self.final.to_dict(),
            "instructions": len(self.instructions),
            "blocked": self.blocked,
        }


class SimulationResult:
    __slots__ = ("plateau", "rovers", "duration_ms")

    def __init__(self, plateau, rovers, duration_ms=0.0):
        self.plateau = plateau
        self.rovers = rovers
        self.duration_ms = duration_ms

    @property
    def lines(self):
        return [outcome.final.to_line() for outcome in self.rovers]

    def to_dict(self):
        return {
            "plateau": self.plateau.to_dict(),
            "rovers": [outcome.to_dict() for outcome in self.rovers],
            "duration_ms": round(self.duration_ms, 3),
        }


class SimulationEngine:
    """Runs rover input blocks. Holds configuration only, no per-run state."""

    def __init__(self, config=None):
        self.config = config or load_config().rovers
        self._log = get_logger()

    def run(self, text):
        return self.run_detailed(text).lines

    def run_detailed(self, text):
        started = time.perf_counter()
        plateau, plans = parse_input(text, self.config.unknown_instructions)

        outcomes = []
        for plan in plans:
            rover = drive(plateau, plan.start, plan.instructions)
            outcomes.append(RoverOutcome(plan.start, rover.to_state(), plan.instructions, rover.blocked))

        duration_ms = (time.perf_counter() - started) * 1000
        self._log.debug("simulation done", rovers=len(outcomes), duration_ms=round(duration_ms, 3))
        return SimulationResult(plateau, outcomes, duration_ms)

    def self_check(self):
        """Run a known scenario and fail loudly if the answer drifts."""
        lines = self.run(SELF_CHECK_INPUT)
        if lines != SELF_CHECK_EXPECTED:
            raise HealthCheckError("self check mismatch", component="engine",
                                   context={"expected": SELF_CHECK_EXPECTED, "got": lines})
        return lines
