"""
Base classes for cryptographic groups.
"""

import secrets
from abc import ABC, abstractmethod

from fiat_shamir import ByteCodec, Shake128DuplexSponge
from .field import GF, PrimeFieldElement


_system_random = secrets.SystemRandom()


class DeserializationError(ValueError):
    """Bytes that do not encode a canonical scalar or group element."""


class Field(ABC):
    """Abstract base class for fields."""

    # Class attributes to be defined by concrete implementations
    order = None
    field = None
    field_bytes_length = None

    @classmethod
    @abstractmethod
    def scalar_byte_length(cls):
        """Return the byte length of a scalar."""
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def random(cls, rng=None):
        """Generate a random field element."""
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def serialize(cls, scalars):
        """Serialize a list of field elements to bytes."""
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def deserialize(cls, data):
        """Deserialize bytes to a list of field elements."""
        raise NotImplementedError


class ScalarField(Field):
    """Base scalar field implementation - to be subclassed with specific order."""

    def __init_subclass__(cls, order=None, **kwargs):
        """Initialize subclass with a specific field order."""
        super().__init_subclass__(**kwargs)
        if order is not None:
            cls.order = order
            cls.field = GF(order)
            cls.field_bytes_length = (order.bit_length() + 7) // 8

    @classmethod
    def scalar_byte_length(cls):
        return cls.field_bytes_length

    @classmethod
    def zero(cls):
        return cls.field.zero()

    @classmethod
    def one(cls):
        return cls.field.one()

    @classmethod
    def from_int(cls, value):
        return cls.field(value)

    @classmethod
    def random(cls, rng=None):
        """Generate a random non-zero scalar; rng defaults to the system CSPRNG."""
        rng = rng or _system_random
        value = rng.randint(1, cls.order - 1)
        return cls.field(value)

    @classmethod
    def serialize(cls, scalars):
        """Serialize list of scalars to bytes (little-endian)."""
        result = b""
        for scalar in scalars:
            if isinstance(scalar, PrimeFieldElement):
                value = scalar.value
            else:
                value = scalar % cls.order
            result += value.to_bytes(cls.field_bytes_length, 'little')
        return result

    @classmethod
    def deserialize(cls, data):
        """Deserialize bytes to list of scalars, rejecting non-canonical encodings."""
        scalar_len = cls.field_bytes_length
        if len(data) % scalar_len != 0:
            raise DeserializationError(
                f"scalar data length {len(data)} is not a multiple of {scalar_len}"
            )

        scalars = []
        for i in range(0, len(data), scalar_len):
            value = int.from_bytes(data[i:i+scalar_len], 'little')
            if value >= cls.order:
                raise DeserializationError("non-canonical scalar encoding")
            scalars.append(cls.field(value))
        return scalars


class Group(ABC):
    """Abstract base class for cryptographic groups."""

    ScalarField = None
    name = None
    Sponge = Shake128DuplexSponge
    Codec = ByteCodec

    @classmethod
    @abstractmethod
    def generator(cls):
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def identity(cls):
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def serialize(cls, elements):
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def deserialize(cls, data):
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def element_byte_length(cls):
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def hash_to_element(cls, data):
        """Map bytes to a group element with unknown discrete logarithm."""
        raise NotImplementedError

    @classmethod
    def codec(cls):
        return cls.Codec(cls.ScalarField.order, cls.ScalarField.scalar_byte_length())

    @classmethod
    def hash_state(cls, label):
        """Fresh sponge, domain separated by the group name and a label."""
        domain = cls.name.encode('utf-8') + b"/" + label
        return cls.Sponge(cls.codec().init(domain))

    @classmethod
    def hash_to_scalar(cls, slices):
        """
        Deterministically map an ordered list of byte strings to a scalar.

        This is the only way Fiat-Shamir challenges are derived.
        """
        codec = cls.codec()
        hash_state = cls.hash_state(b"hash_to_scalar")
        for data in slices:
            codec.prover_message(hash_state, bytes(data))
        return cls.ScalarField.field(codec.verifier_challenge(hash_state))

    @classmethod
    def random(cls, rng=None):
        """Generate random group element."""
        scalar = cls.ScalarField.random(rng)
        return cls.scalar_mult(scalar, cls.generator())

    @classmethod
    def scalar_mult(cls, scalar, element):
        """Scalar multiplication."""
        if isinstance(scalar, PrimeFieldElement):
            scalar = scalar.value
        return element * scalar

    @classmethod
    def msm(cls, scalars, elements):
        """Multi-scalar multiplication."""
        if len(scalars) != len(elements):
            raise ValueError("Scalars and elements must have same length")

        result = cls.identity()
        for scalar, element in zip(scalars, elements):
            result = result + element * scalar
        return result
