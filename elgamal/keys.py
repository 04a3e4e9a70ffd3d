"""
ElGamal key pairs.
"""

from dataclasses import dataclass, field

from groups import DeserializationError


@dataclass(frozen=True)
class KeyPair:
    """A secret scalar and its public element ``generator * secret_key``."""

    group: type = field(compare=False, repr=False)
    secret_key: object = field(repr=False)
    public_key: object

    @classmethod
    def generate(cls, group, rng=None):
        secret_key = group.ScalarField.random(rng)
        return cls(group, secret_key, group.generator() * secret_key)

    @classmethod
    def byte_length(cls, group):
        return group.element_byte_length() + group.ScalarField.scalar_byte_length()

    def serialize(self):
        """Public key followed by secret key."""
        return (
            self.group.serialize([self.public_key]) +
            self.group.ScalarField.serialize([self.secret_key])
        )

    @classmethod
    def deserialize(cls, group, data):
        if len(data) != cls.byte_length(group):
            raise DeserializationError(
                f"expected {cls.byte_length(group)} bytes for a key pair, got {len(data)}"
            )
        element_length = group.element_byte_length()
        [public_key] = group.deserialize(data[:element_length])
        [secret_key] = group.ScalarField.deserialize(data[element_length:])
        if group.generator() * secret_key != public_key:
            raise DeserializationError("public key does not match secret key")
        return cls(group, secret_key, public_key)
