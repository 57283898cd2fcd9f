from rovers.plateau import Plateau
from rovers.state import HEADINGS, MOVES, RoverPlan, RoverState
from rovers.entities import Rover
from rovers.parser import parse_input
from rovers.engine import SimulationEngine, SimulationResult, simulate_rover

__all__ = [
    "HEADINGS",
    "MOVES",
    "Plateau",
    "Rover",
    "RoverPlan",
    "RoverState",
    "SimulationEngine",
    "SimulationResult",
    "parse_input",
    "simulate_rover",
]
