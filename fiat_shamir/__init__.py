"""
Fiat-Shamir transformation subpackage.
"""

from .transform import NonInteractiveProof
from .codec import Codec, ByteCodec, I2OSP, OS2IP
from .duplex_sponge import DuplexSpongeInterface, Shake128DuplexSponge, Keccak256DuplexSponge

__all__ = [
    'NonInteractiveProof',
    'Codec',
    'ByteCodec',
    'I2OSP',
    'OS2IP',
    'DuplexSpongeInterface',
    'Shake128DuplexSponge',
    'Keccak256DuplexSponge'
]
