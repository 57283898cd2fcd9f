"""Plateau defines the area rovers may occupy."""


class Plateau:
    """Inclusive rectangle [0, max_x] x [0, max_y]."""

    __slots__ = ("max_x", "max_y")

    def __init__(self, max_x, max_y):
        self.max_x = max_x
        self.max_y = max_y

    def contains(self, x, y):
        return 0 <= x <= self.max_x and 0 <= y <= self.max_y

    def __eq__(self, other):
        if not isinstance(other, Plateau):
            return NotImplemented
        return (self.max_x, self.max_y) == (other.max_x, other.max_y)

    def __repr__(self):
        return f"Plateau({self.max_x}, {self.max_y})"

    def to_dict(self):
        return {"max_x": self.max_x, "max_y": self.max_y}
