"""
Pure Python implementation of finite field arithmetic.
"""


class PrimeFieldElement:
    """Element of a finite field GF(p)."""

    def __init__(self, value, field):
        self.field = field
        self.value = value % field.p

    def _coerce(self, other):
        if isinstance(other, PrimeFieldElement):
            return other.value
        if isinstance(other, int):
            return other
        return None

    def __add__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return PrimeFieldElement(self.value + value, self.field)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return PrimeFieldElement(self.value - value, self.field)

    def __rsub__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return PrimeFieldElement(value - self.value, self.field)

    def __mul__(self, other):
        value = self._coerce(other)
        if value is None:
            # Lets Element.__rmul__ handle scalar * element
            return NotImplemented
        return PrimeFieldElement(self.value * value, self.field)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        if value % self.field.p == 0:
            raise ZeroDivisionError("division by zero in GF(p)")
        return PrimeFieldElement(self.value * pow(value, -1, self.field.p), self.field)

    def __pow__(self, exp):
        return PrimeFieldElement(pow(self.value, exp, self.field.p), self.field)

    def __neg__(self):
        return PrimeFieldElement(-self.value, self.field)

    def __eq__(self, other):
        if isinstance(other, int):
            return self.value == (other % self.field.p)
        if not isinstance(other, PrimeFieldElement):
            return NotImplemented
        return self.field.p == other.field.p and self.value == other.value

    def __hash__(self):
        return hash(self.value)

    def __int__(self):
        return self.value

    def __repr__(self):
        return f"PrimeFieldElement({self.value}, GF({self.field.p}))"

    def is_zero(self):
        return self.value == 0

    def invert(self):
        """Multiplicative inverse, or None for zero."""
        if self.is_zero():
            return None
        return PrimeFieldElement(pow(self.value, -1, self.field.p), self.field)

    def sqrt(self):
        """Compute square root if it exists (for p ≡ 3 mod 4)."""
        if self.field.p % 4 != 3:
            raise NotImplementedError("sqrt only implemented for p ≡ 3 mod 4")

        if not self.is_square():
            return None

        return PrimeFieldElement(pow(self.value, (self.field.p + 1) // 4, self.field.p), self.field)

    def is_square(self):
        """Check if element is a quadratic residue."""
        if self.value == 0:
            return True
        return pow(self.value, (self.field.p - 1) // 2, self.field.p) == 1


class FiniteField:
    """Finite field GF(p) for prime p."""

    def __init__(self, p):
        self.p = p
        self.order = p
        self.characteristic = p

    def __call__(self, value):
        """Create a field element."""
        if isinstance(value, PrimeFieldElement):
            return PrimeFieldElement(value.value, self)
        return PrimeFieldElement(value, self)

    def zero(self):
        return PrimeFieldElement(0, self)

    def one(self):
        return PrimeFieldElement(1, self)

    def __repr__(self):
        return f"GF({self.p})"


def GF(p):
    """Factory function to create finite fields, mimicking SAGE's GF()."""
    return FiniteField(p)
