from rovers.state import LEFT, MOVE, MOVES, RIGHT, RoverState, rotate


class Rover:
    """A rover driving on a plateau. Moves that would leave the plateau are dropped."""

    def __init__(self, x, y, heading):
        self.x = x
        self.y = y
        self.heading = heading
        self.blocked = 0

    @classmethod
    def from_state(cls, state):
        return cls(state.x, state.y, state.heading)

    def turn_left(self):
        self.heading = rotate(self.heading, -1)

    def turn_right(self):
        self.heading = rotate(self.heading, 1)

    def move(self, plateau):
        """Advance one cell. Returns False when the plateau edge stops the rover."""
        dx, dy = MOVES[self.heading]
        x, y = self.x + dx, self.y + dy
        if not plateau.contains(x, y):
            self.blocked += 1
            return False
        self.x, self.y = x, y
        return True

    def execute(self, instruction, plateau):
        if instruction == LEFT:
            self.turn_left()
        elif instruction == RIGHT:
            self.turn_right()
        elif instruction == MOVE:
            self.move(plateau)

    def to_state(self):
        """Freeze the current position into an immutable snapshot."""
        return RoverState(self.x, self.y, self.heading)
