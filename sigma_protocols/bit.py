"""
Proof that an ElGamal ciphertext encrypts a bit.

With ``G = (g, y)`` and ``H = (1, g)``, a ciphertext ``C = H * b + G * r``
encrypts ``b`` in the exponent. Its "square" ``C' = C * b + G * s``
encrypts ``b * b``, and ``C' - C = G * (r * (b - 1) + s)`` exactly when
``b * b == b``, that is when ``b`` is 0 or 1. The proof shows knowledge of
a preimage of ``(C, C', C' - C)`` under

    f(b, r, s, t) = (H * b + G * r, C * b + G * s, G * t)

which is expressed as six linear equations, one per coordinate.

The challenge is ``H(g, y, B, C, C')``: the generator and the public key
come first so that every public input is hashed.

The first nonce is the bit itself, so the first response is
``D[0] = b * (v + 1)`` and anyone who recomputes ``v`` learns ``b``. The
proof shows well-formedness only; it does not hide the bit.
"""

import logging
from dataclasses import dataclass, field

from elgamal import Ciphertext, encrypt_with_randomness
from fiat_shamir import NonInteractiveProof
from groups import DeserializationError
from .sigma_protocols import LinearRelation, LinearSigmaProtocol


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BitProof:
    """Commitment ``B`` (three pairs, six elements) and response ``D`` (four scalars)."""

    group: type = field(compare=False, repr=False)
    commitment: tuple
    response: tuple

    @classmethod
    def byte_length(cls, group):
        return 6 * group.element_byte_length() + 4 * group.ScalarField.scalar_byte_length()

    def serialize(self):
        return (
            self.group.serialize(self.commitment) +
            self.group.ScalarField.serialize(self.response)
        )

    @classmethod
    def deserialize(cls, group, data):
        if len(data) != cls.byte_length(group):
            raise DeserializationError(
                f"expected {cls.byte_length(group)} bytes for a bit proof, got {len(data)}"
            )
        split = 6 * group.element_byte_length()
        return cls(
            group,
            tuple(group.deserialize(data[:split])),
            tuple(group.ScalarField.deserialize(data[split:])),
        )


class BitProtocol(LinearSigmaProtocol):
    """
    Linear Sigma protocol over ``f`` whose first nonce is the bit itself.
    """

    def __init__(self, group, ciphertext, c_prime, public_key):
        self.ciphertext = ciphertext
        self.c_prime = c_prime
        self.public_key = public_key
        super().__init__(statement(group, ciphertext, c_prime, public_key))

    def sample_nonces(self, witness, rng=None):
        return [witness[0]] + [self.instance.Domain.random(rng) for _ in range(3)]

    def challenge_slices(self, commitment):
        serialize = self.group.serialize
        return [
            serialize([self.group.generator()]),
            serialize([self.public_key]),
            serialize(commitment),
            self.ciphertext.serialize(),
            self.c_prime.serialize(),
        ]


def statement(group, ciphertext, c_prime, public_key):
    c_diff = c_prime - ciphertext

    relation = LinearRelation(group)
    [var_b, var_r, var_s, var_t] = relation.allocate_scalars(4)
    [var_g, var_y, var_c1, var_c2] = relation.allocate_elements(4)
    image = relation.allocate_elements(6)

    # H * b + G * r
    relation.append_equation(image[0], [(var_r, var_g)])
    relation.append_equation(image[1], [(var_b, var_g), (var_r, var_y)])
    # C * b + G * s
    relation.append_equation(image[2], [(var_b, var_c1), (var_s, var_g)])
    relation.append_equation(image[3], [(var_b, var_c2), (var_s, var_y)])
    # G * t
    relation.append_equation(image[4], [(var_t, var_g)])
    relation.append_equation(image[5], [(var_t, var_y)])

    relation.set_elements([
        (var_g, group.generator()),
        (var_y, public_key),
        (var_c1, ciphertext.c1),
        (var_c2, ciphertext.c2),
    ] + list(zip(image, [
        ciphertext.c1, ciphertext.c2,
        c_prime.c1, c_prime.c2,
        c_diff.c1, c_diff.c2,
    ])))
    return relation


def _as_scalar(group, value):
    if isinstance(value, int):
        return group.ScalarField.from_int(value)
    return value


def square_ciphertext(group, ciphertext, bit, s, public_key):
    """``C' = C * b + G * s``, an encryption of ``b * b`` with randomness ``r * b + s``."""
    bit = _as_scalar(group, bit)
    return Ciphertext(
        group,
        ciphertext.c1 * bit + group.generator() * s,
        ciphertext.c2 * bit + public_key * s,
    )


def encrypt_bit(group, bit, public_key, rng=None):
    """Return ``(C, C', r, s)`` for a fresh encryption of ``bit`` and its square."""
    bit = _as_scalar(group, bit)
    r = group.ScalarField.random(rng)
    s = group.ScalarField.random(rng)
    ciphertext = encrypt_with_randomness(group, group.generator() * bit, public_key, r)
    return ciphertext, square_ciphertext(group, ciphertext, bit, s, public_key), r, s


def prove(group, bit, r_real, s_real, ciphertext, c_prime, public_key, rng=None):
    bit = _as_scalar(group, bit)
    t_real = r_real * (bit - 1) + s_real
    nizk = NonInteractiveProof(BitProtocol(group, ciphertext, c_prime, public_key))
    commitment, response = nizk.prove([bit, r_real, s_real, t_real], rng)
    return BitProof(group, tuple(commitment), tuple(response))


def verify(group, proof, ciphertext, c_prime, public_key):
    """Check ``Y * v + B == f(D)`` on all six coordinates."""
    nizk = NonInteractiveProof(BitProtocol(group, ciphertext, c_prime, public_key))
    if not nizk.verify(list(proof.commitment), list(proof.response)):
        logger.debug("bit proof rejected")
        return False
    return True
