"""
Pure Python implementation of the byte codec used for Fiat-Shamir challenges.
"""

from abc import ABC, abstractmethod


def I2OSP(n, length):
    """Convert integer to octet string."""
    if n < 0 or n >= 256**length:
        raise ValueError("Integer too large for length")
    return n.to_bytes(length, 'big')


def OS2IP(octets):
    """Convert octet string to integer."""
    return int.from_bytes(octets, 'big')


class Codec(ABC):
    """
    Abstract codec for mapping between prover messages and hash domains.
    """

    def init(self, domain):
        """Initialize hash state with a domain separation tag."""
        return I2OSP(len(domain), 4) + domain

    @abstractmethod
    def prover_message(self, hash_state, message):
        raise NotImplementedError

    @abstractmethod
    def verifier_challenge(self, hash_state):
        raise NotImplementedError


class ByteCodec(Codec):
    """
    Byte-oriented codec.

    Every prover message is absorbed with a 4-byte length prefix so that an
    ordered list of byte strings is encoded unambiguously. Challenges are
    integers reduced modulo ``order``.
    """

    def __init__(self, order, scalar_byte_length):
        self.order = order
        self.scalar_byte_length = scalar_byte_length

    def prover_message(self, hash_state, message):
        """Encode prover message into hash state."""
        hash_state.absorb(I2OSP(len(message), 4) + message)

    def verifier_challenge(self, hash_state):
        """Generate verifier challenge from hash state."""
        # 16 extra bytes keep the modular bias below 2^-128
        uniform_bytes = hash_state.squeeze(self.scalar_byte_length + 16)
        return OS2IP(uniform_bytes) % self.order
