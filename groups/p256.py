"""
P-256 (secp256r1) elliptic curve group implementation.
"""

from fiat_shamir import I2OSP, OS2IP, Keccak256DuplexSponge
from .field import GF
from .elliptic_curve import EllipticCurve
from .base import DeserializationError, Group, ScalarField


# P-256 scalar field with order n
class P256ScalarField(ScalarField, order=0xffffffff00000000ffffffffffffffffbce6faada7179e84f3b9cac2fc632551):
    """Scalar field for P-256 group."""
    pass


class GroupP256(Group):
    """NIST P-256 (secp256r1) elliptic curve group."""

    name = "P-256"

    # P-256 parameters
    p = 0xffffffff00000001000000000000000000000000ffffffffffffffffffffffff
    n = 0xffffffff00000000ffffffffffffffffbce6faada7179e84f3b9cac2fc632551
    a = p - 3
    b = 0x5ac635d8aa3a93e7b3ebbd55769886bc651d06b0cc53b0f63bce3c3e27d2604b

    # Generator point
    Gx = 0x6b17d1f2e12c4247f8bce6e563a440f277037d812deb33a0f4a13945d898c296
    Gy = 0x4fe342e2fe1a7f9b8ee7eb4a7c0f9e162bce33576b315ececbb6406837bf51f5

    # Initialize field and curve
    field = GF(p)
    curve = EllipticCurve(field, [a, b])
    ScalarField = P256ScalarField

    field_byte_length = 32

    _generator = None
    _identity = None

    @classmethod
    def generator(cls):
        if cls._generator is None:
            cls._generator = cls.curve(cls.Gx, cls.Gy)
        return cls._generator

    @classmethod
    def identity(cls):
        if cls._identity is None:
            cls._identity = cls.curve.infinity()
        return cls._identity

    @classmethod
    def element_byte_length(cls):
        return 33  # Compressed point format

    @classmethod
    def serialize(cls, elements):
        """Serialize list of elements to bytes (compressed format, identity as zeros)."""
        result = b""
        for element in elements:
            if element.is_infinity:
                result += b'\x00' * 33
            else:
                x_bytes = element.x.value.to_bytes(cls.field_byte_length, 'big')
                if element.y.value % 2 == 0:
                    result += b'\x02' + x_bytes
                else:
                    result += b'\x03' + x_bytes
        return result

    @classmethod
    def deserialize(cls, data):
        """Deserialize bytes to list of elements."""
        if len(data) % 33 != 0:
            raise DeserializationError(f"element data length {len(data)} is not a multiple of 33")

        elements = []
        for i in range(0, len(data), 33):
            point_data = data[i:i+33]
            flag = point_data[0]

            if flag == 0x00:
                if any(point_data[1:]):
                    raise DeserializationError("non-canonical identity encoding")
                elements.append(cls.identity())
                continue

            if flag not in (0x02, 0x03):
                raise DeserializationError(f"invalid point prefix {flag:#04x}")

            x_value = int.from_bytes(point_data[1:], 'big')
            if x_value >= cls.p:
                raise DeserializationError("x coordinate is not reduced modulo p")

            point = cls.curve.lift_x(x_value, odd=(flag == 0x03))
            if point is None:
                raise DeserializationError("point is not on the curve")
            elements.append(point)

        return elements

    @classmethod
    def hash_to_element(cls, data):
        """Try-and-increment: squeeze x candidates until one lies on the curve."""
        hash_state = cls.hash_state(b"hash_to_element")
        hash_state.absorb(I2OSP(len(data), 4) + data)
        while True:
            x = OS2IP(hash_state.squeeze(cls.field_byte_length + 16)) % cls.p
            point = cls.curve.lift_x(x)
            if point is not None:
                return point


class GroupP256Keccak(GroupP256):
    """P-256 with challenges derived from the Keccak256 duplex sponge."""

    Sponge = Keccak256DuplexSponge
    _generator = None
    _identity = None
