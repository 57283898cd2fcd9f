"""Parse the plain-text rover format.

    <max_x> <max_y>
    <x> <y> <heading>
    <instructions>
    ...

Blank lines are skipped. The first remaining line sets the plateau, every
following pair of lines describes one rover. Any fault raises InvalidInputError; nothing is returned partially.
"""

import re

from core.errors import InvalidInputError
from rovers.plateau import Plateau
from rovers.state import HEADINGS, INSTRUCTIONS, RoverPlan, RoverState

REJECT = "reject"
IGNORE = "ignore"
POLICIES = (REJECT, IGNORE)

_INTEGER = re.compile(r"-?[0-9]+")


def _parse_int(token, line_no):
    # int() alone would also take "+3", "1_000" and non-ASCII digits
    if not _INTEGER.fullmatch(token):
        raise InvalidInputError(f"not an integer: {token!r}", line=line_no)
    return int(token)


def parse_plateau(line, line_no=1):
    tokens = line.split()
    if len(tokens) != 2:
        raise InvalidInputError("plateau line needs two integers", line=line_no)
    return Plateau(_parse_int(tokens[0], line_no), _parse_int(tokens[1], line_no))


def parse_position(line, line_no):
    tokens = line.split()
    if len(tokens) != 3:
        raise InvalidInputError("position line needs 'x y heading'", line=line_no)
    x, y = _parse_int(tokens[0], line_no), _parse_int(tokens[1], line_no)
    heading = tokens[2]
    if heading not in HEADINGS:
        raise InvalidInputError(f"unknown heading: {heading!r}", line=line_no)
    return RoverState(x, y, heading)


def parse_instructions(line, line_no, unknown_instructions=REJECT):
    unknown = [char for char in line if char not in INSTRUCTIONS]
    if not unknown:
        return line
    if unknown_instructions == IGNORE:
        return "".join(char for char in line if char in INSTRUCTIONS)
    raise InvalidInputError(f"unknown instruction: {unknown[0]!r}", line=line_no)


def parse_input(text, unknown_instructions=REJECT):
    """Return (plateau, plans) for a rover input block."""
    if unknown_instructions not in POLICIES:
        raise ValueError(f"unknown instruction policy: {unknown_instructions!r}")
    if text is None or not text.strip():
        raise InvalidInputError("empty input")

    # Blank lines are dropped; line numbers still refer to the original text
    numbered = [(line_no, line.strip()) for line_no, line in enumerate(text.strip().splitlines(), 1)
                if line.strip()]
    plateau = parse_plateau(numbered[0][1], numbered[0][0])

    plans = []
    for index in range(1, len(numbered), 2):
        line_no, line = numbered[index]
        start = parse_position(line, line_no)
        if not plateau.contains(start.x, start.y):
            raise InvalidInputError("rover starts outside the plateau", line=line_no,
                                    context={"plateau": plateau.to_dict(), "start": start.to_dict()})
        if index + 1 >= len(numbered):
            raise InvalidInputError("missing instruction line", line=line_no + 1)
        instructions_no, instructions_line = numbered[index + 1]
        instructions = parse_instructions(instructions_line, instructions_no, unknown_instructions)
        plans.append(RoverPlan(start, instructions, line_no))
    return plateau, plans
