"""
ElGamal encryption over any prime-order group, in additive notation.

A message is a group element ``m``; its encryption under public key ``pk``
with nonce ``r`` is ``(g * r, m + pk * r)``.
"""

from dataclasses import dataclass, field

from groups import DeserializationError


@dataclass(frozen=True)
class Ciphertext:
    """ElGamal ciphertext ``(c1, c2)``."""

    group: type = field(compare=False, repr=False)
    c1: object
    c2: object

    @classmethod
    def zero(cls, group):
        """Encryption of the identity with zero randomness."""
        return cls(group, group.identity(), group.identity())

    def __add__(self, other):
        """Homomorphic combination: decrypts to the sum of both messages."""
        if not isinstance(other, Ciphertext):
            return NotImplemented
        return Ciphertext(self.group, self.c1 + other.c1, self.c2 + other.c2)

    def __sub__(self, other):
        if not isinstance(other, Ciphertext):
            return NotImplemented
        return Ciphertext(self.group, self.c1 - other.c1, self.c2 - other.c2)

    def __mul__(self, scalar):
        return Ciphertext(self.group, self.c1 * scalar, self.c2 * scalar)

    __rmul__ = __mul__

    @classmethod
    def byte_length(cls, group):
        return 2 * group.element_byte_length()

    def serialize(self):
        return self.group.serialize([self.c1, self.c2])

    @classmethod
    def deserialize(cls, group, data):
        if len(data) != cls.byte_length(group):
            raise DeserializationError(
                f"expected {cls.byte_length(group)} bytes for a ciphertext, got {len(data)}"
            )
        c1, c2 = group.deserialize(data)
        return cls(group, c1, c2)

    def decrypt(self, keypair):
        return decrypt(self, keypair)


def encrypt_with_randomness(group, message, public_key, r):
    """Deterministic encryption with an explicit nonce."""
    return Ciphertext(group, group.generator() * r, message + public_key * r)


def encrypt(message, keypair, rng=None):
    """Encrypt a group element under the key pair's public key with a fresh nonce."""
    r = keypair.group.ScalarField.random(rng)
    return encrypt_with_randomness(keypair.group, message, keypair.public_key, r)


def decrypt(ciphertext, keypair):
    """Recover the message element ``c2 - c1 * secret_key``."""
    return ciphertext.c2 - ciphertext.c1 * keypair.secret_key


def rerandomize(ciphertext, public_key, r, generator=None):
    """
    Re-encrypt without changing the plaintext: ``(c1 + g * r, c2 + pk * r)``.
    """
    g = generator if generator is not None else ciphertext.group.generator()
    return Ciphertext(ciphertext.group, ciphertext.c1 + g * r, ciphertext.c2 + public_key * r)
