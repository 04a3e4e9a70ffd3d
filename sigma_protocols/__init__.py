"""
Sigma protocols core subpackage.
"""

from .sigma_protocols import (
    SigmaProtocol,
    LinearSigmaProtocol,
    LinearMap,
    LinearRelation
)
from . import schnorr, chaum_pedersen, bit, shuffle
from .schnorr import Proof
from .chaum_pedersen import CPProof
from .bit import BitProof
from .shuffle import (
    ShuffleInstance,
    ShuffleWitness,
    ShuffleProof,
    WitnessEncodingError,
    MAX_SHUFFLE_SIZE
)
from .ciphersuite import CIPHERSUITE

__all__ = [
    'SigmaProtocol',
    'LinearSigmaProtocol',
    'LinearMap',
    'LinearRelation',
    'schnorr',
    'chaum_pedersen',
    'bit',
    'shuffle',
    'Proof',
    'CPProof',
    'BitProof',
    'ShuffleInstance',
    'ShuffleWitness',
    'ShuffleProof',
    'WitnessEncodingError',
    'MAX_SHUFFLE_SIZE',
    'CIPHERSUITE'
]
