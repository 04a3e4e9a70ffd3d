"""
Pure Python implementation of duplex sponge construction.
Used for Fiat-Shamir challenges and hashing to group elements.
"""

import hashlib
from abc import ABC, abstractmethod


class DuplexSpongeInterface(ABC):
    """Interface for duplex sponge operations."""

    def __init__(self, initial_state=None):
        """Initialize with optional initial state."""
        self.state = initial_state or b''

    @abstractmethod
    def absorb(self, data):
        raise NotImplementedError

    @abstractmethod
    def squeeze(self, length):
        raise NotImplementedError

    def clone(self):
        """Clone the current sponge state."""
        new_sponge = type(self)()
        new_sponge.__dict__.update(self.__dict__)
        return new_sponge


class Shake128DuplexSponge(DuplexSpongeInterface):
    """SHAKE128-based duplex sponge."""

    def absorb(self, data):
        """Absorb data into the sponge."""
        self.state += data

    def squeeze(self, length):
        """Squeeze output from the sponge."""
        output = hashlib.shake_128(self.state).digest(length)
        # Squeezed bytes are absorbed back so that consecutive squeezes differ
        self.state += output
        return output


class Keccak256DuplexSponge(DuplexSpongeInterface):
    """Keccak256-based duplex sponge (simplified)."""

    def __init__(self, initial_state=None):
        super().__init__(initial_state)
        self.buffer = b''

    def absorb(self, data):
        """Absorb data into the sponge."""
        self.buffer += data

    def squeeze(self, length):
        """Squeeze output from the sponge."""
        h = hashlib.sha3_256(self.state + self.buffer)
        output = b''

        while len(output) < length:
            output += h.digest()
            h = hashlib.sha3_256(h.digest())

        output = output[:length]
        self.state = hashlib.sha3_256(self.state + self.buffer + output).digest()
        self.buffer = b''

        return output
