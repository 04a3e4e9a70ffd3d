"""
Batched ElGamal over fixed-length vectors.
"""

from groups import DeserializationError, ElementN, Product
from .ciphertext import Ciphertext, decrypt, encrypt


class ElGamalN(Product):
    """Vector of N ciphertexts."""

    def __init__(self, group, items):
        super().__init__(items)
        self.group = group

    def _new(self, items):
        return ElGamalN(self.group, items)

    @classmethod
    def byte_length(cls, group, n):
        return n * Ciphertext.byte_length(group)

    def serialize(self):
        return b"".join(ciphertext.serialize() for ciphertext in self.items)

    @classmethod
    def deserialize(cls, group, n, data):
        if len(data) != cls.byte_length(group, n):
            raise DeserializationError(
                f"expected {cls.byte_length(group, n)} bytes for {n} ciphertexts, got {len(data)}"
            )
        size = Ciphertext.byte_length(group)
        return cls(group, [
            Ciphertext.deserialize(group, data[i:i+size])
            for i in range(0, len(data), size)
        ])

    def decrypt(self, keypair):
        return decrypt_n(self, keypair)


def encrypt_n(messages, keypair, rng=None):
    """Encrypt each element of an ElementN under the same key, each with its own nonce."""
    return ElGamalN(keypair.group, [encrypt(message, keypair, rng) for message in messages])


def decrypt_n(ciphertexts, keypair):
    return ElementN(keypair.group, [decrypt(ciphertext, keypair) for ciphertext in ciphertexts])
