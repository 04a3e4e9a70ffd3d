"""
Fixed-length vectors of group values.
"""

from .base import DeserializationError


class Product:
    """
    Immutable fixed-length vector supporting element-wise operations.

    The length is fixed when the vector is built; pairwise operations
    require both sides to have the same length.
    """

    def __init__(self, items):
        self.items = tuple(items)

    def _new(self, items):
        return type(self)(items)

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def __eq__(self, other):
        if not isinstance(other, Product):
            return NotImplemented
        return type(self) is type(other) and self.items == other.items

    def __hash__(self):
        return hash(self.items)

    def __repr__(self):
        return f"{type(self).__name__}({list(self.items)!r})"

    def map(self, function):
        """Apply function to every component."""
        return self._new(function(item) for item in self.items)

    def zip_with(self, other, function):
        """Combine two vectors of the same length component by component."""
        if len(self) != len(other):
            raise ValueError(f"length mismatch: {len(self)} != {len(other)}")
        return self._new(function(a, b) for a, b in zip(self.items, other))


class ElementN(Product):
    """Vector of N group elements."""

    def __init__(self, group, items):
        super().__init__(items)
        self.group = group

    def _new(self, items):
        return ElementN(self.group, items)

    @classmethod
    def uniform(cls, group, n, rng=None):
        """N independent random elements."""
        return cls(group, [group.random(rng) for _ in range(n)])

    @classmethod
    def byte_length(cls, group, n):
        return n * group.element_byte_length()

    def serialize(self):
        return self.group.serialize(self.items)

    @classmethod
    def deserialize(cls, group, n, data):
        if len(data) != cls.byte_length(group, n):
            raise DeserializationError(
                f"expected {cls.byte_length(group, n)} bytes for {n} elements, got {len(data)}"
            )
        return cls(group, group.deserialize(data))
