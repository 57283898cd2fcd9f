"""Headings, instructions and immutable rover snapshots."""

# Clockwise order; turning left steps back, turning right steps forward.
HEADINGS = ("N", "E", "S", "W")

MOVES = {
    "N": (0, 1),
    "E": (1, 0),
    "S": (0, -1),
    "W": (-1, 0),
}

LEFT = "L"
RIGHT = "R"
MOVE = "M"
INSTRUCTIONS = frozenset((LEFT, RIGHT, MOVE))


def rotate(heading, steps):
    """Return the heading `steps` quarter turns clockwise (negative = counter-clockwise)."""
    return HEADINGS[(HEADINGS.index(heading) + steps) % len(HEADINGS)]


class RoverState:
    __slots__ = ("x", "y", "heading")

    def __init__(self, x, y, heading):
        self.x, self.y, self.heading = x, y, heading

    def __eq__(self, other):
        if not isinstance(other, RoverState):
            return NotImplemented
        return (self.x, self.y, self.heading) == (other.x, other.y, other.heading)

    def __repr__(self):
        return f"RoverState({self.x}, {self.y}, {self.heading!r})"

    def to_line(self):
        return f"{self.x} {self.y} {self.heading}"

    def to_dict(self):
        return {"x": self.x, "y": self.y, "heading": self.heading}


class RoverPlan:
    """A parsed rover record: where it starts and what it should do."""

    __slots__ = ("start", "instructions", "line_no")

    def __init__(self, start, instructions, line_no=None):
        self.start = start
        self.instructions = instructions
        self.line_no = line_no
