"""
Elliptic curves over finite fields.
"""

from .field import PrimeFieldElement


class EllipticCurvePoint:
    """Point on an elliptic curve, in affine coordinates."""

    def __init__(self, curve, x, y):
        self.curve = curve
        self.x = x
        self.y = y
        self.is_infinity = (x is None and y is None)

    def __add__(self, other):
        if not isinstance(other, EllipticCurvePoint):
            return NotImplemented
        if self.is_infinity:
            return other
        if other.is_infinity:
            return self

        if self.x == other.x:
            if self.y == other.y:
                # Point doubling
                if self.y.value == 0:
                    return self.curve.infinity()

                s = (3 * self.x * self.x + self.curve.a) / (2 * self.y)
                x3 = s * s - 2 * self.x
                y3 = s * (self.x - x3) - self.y
                return EllipticCurvePoint(self.curve, x3, y3)
            else:
                # Points are inverses
                return self.curve.infinity()
        else:
            s = (other.y - self.y) / (other.x - self.x)
            x3 = s * s - self.x - other.x
            y3 = s * (self.x - x3) - self.y
            return EllipticCurvePoint(self.curve, x3, y3)

    def __sub__(self, other):
        if not isinstance(other, EllipticCurvePoint):
            return NotImplemented
        return self + (-other)

    def __mul__(self, scalar):
        """Scalar multiplication using double-and-add."""
        if isinstance(scalar, PrimeFieldElement):
            scalar = scalar.value
        elif not isinstance(scalar, int):
            return NotImplemented

        if scalar == 0 or self.is_infinity:
            return self.curve.infinity()

        if scalar < 0:
            return (-self) * (-scalar)

        result = self.curve.infinity()
        addend = self

        while scalar:
            if scalar & 1:
                result = result + addend
            addend = addend + addend
            scalar >>= 1

        return result

    def __rmul__(self, scalar):
        return self.__mul__(scalar)

    def __neg__(self):
        if self.is_infinity:
            return self
        return EllipticCurvePoint(self.curve, self.x, -self.y)

    def __eq__(self, other):
        if not isinstance(other, EllipticCurvePoint):
            return NotImplemented
        if self.is_infinity and other.is_infinity:
            return True
        if self.is_infinity or other.is_infinity:
            return False
        return self.x == other.x and self.y == other.y

    def __hash__(self):
        if self.is_infinity:
            return hash(None)
        return hash((self.x.value, self.y.value))

    def __repr__(self):
        if self.is_infinity:
            return "Point at infinity"
        return f"({self.x.value}, {self.y.value})"


class EllipticCurve:
    """Elliptic curve y^2 = x^3 + ax + b over a finite field."""

    def __init__(self, field, coefficients):
        self.field = field
        if len(coefficients) == 2:
            self.a = field(coefficients[0])
            self.b = field(coefficients[1])
        else:
            raise ValueError("Only Weierstrass form y^2 = x^3 + ax + b supported")

        # Check discriminant
        discriminant = -16 * (4 * self.a * self.a * self.a + 27 * self.b * self.b)
        if discriminant.value == 0:
            raise ValueError("Singular curve")

    def __call__(self, x, y):
        """Create a point on the curve."""
        if x is None and y is None:
            return self.infinity()

        x = self.field(x)
        y = self.field(y)

        # Verify point is on curve
        y_squared = y * y
        x_cubed_plus = x * x * x + self.a * x + self.b

        if y_squared != x_cubed_plus:
            raise ValueError(f"Point ({x.value}, {y.value}) not on curve")

        return EllipticCurvePoint(self, x, y)

    def infinity(self):
        """Return the point at infinity."""
        return EllipticCurvePoint(self, None, None)

    def lift_x(self, x, odd=False):
        """
        Return the point with abscissa x and the requested y parity, or None
        if x^3 + ax + b is not a square.
        """
        x = self.field(x)
        y = (x * x * x + self.a * x + self.b).sqrt()
        if y is None:
            return None
        if (y.value % 2 == 1) != odd:
            y = -y
        return EllipticCurvePoint(self, x, y)

    def __repr__(self):
        return f"EllipticCurve(GF({self.field.p}), [{self.a.value}, {self.b.value}])"
