"""
Chaum-Pedersen proof of equality of discrete logarithms.

Proves that one secret ``x`` satisfies both ``y1 = g1 * x`` and
``y2 = g2 * x``. A single nonce ``v`` gives ``t1 = g1 * v`` and
``t2 = g2 * v``; the challenge is ``H(g1, g2, y1, y2, t1, t2)``.
"""

import logging
from dataclasses import dataclass, field

from fiat_shamir import NonInteractiveProof
from groups import DeserializationError
from .sigma_protocols import LinearRelation, LinearSigmaProtocol


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CPProof:
    group: type = field(compare=False, repr=False)
    commitment: tuple
    response: object

    @classmethod
    def byte_length(cls, group):
        return 2 * group.element_byte_length() + group.ScalarField.scalar_byte_length()

    def serialize(self):
        return (
            self.group.serialize(self.commitment) +
            self.group.ScalarField.serialize([self.response])
        )

    @classmethod
    def deserialize(cls, group, data):
        if len(data) != cls.byte_length(group):
            raise DeserializationError(
                f"expected {cls.byte_length(group)} bytes for a Chaum-Pedersen proof, got {len(data)}"
            )
        split = 2 * group.element_byte_length()
        [response] = group.ScalarField.deserialize(data[split:])
        return cls(group, tuple(group.deserialize(data[:split])), response)


def statement(group, g1, g2, y1, y2):
    relation = LinearRelation(group)
    [var_x] = relation.allocate_scalars(1)
    [var_g1, var_g2, var_y1, var_y2] = relation.allocate_elements(4)
    relation.append_equation(var_y1, [(var_x, var_g1)])
    relation.append_equation(var_y2, [(var_x, var_g2)])
    relation.set_elements([(var_g1, g1), (var_g2, g2), (var_y1, y1), (var_y2, y2)])
    return relation


def prove(group, secret_x, g1, g2, y1, y2, rng=None):
    nizk = NonInteractiveProof(LinearSigmaProtocol(statement(group, g1, g2, y1, y2)))
    commitment, [response] = nizk.prove([secret_x], rng)
    return CPProof(group, tuple(commitment), response)


def verify(group, g1, g2, y1, y2, proof):
    """Both ``g1 * s == t1 + y1 * c`` and ``g2 * s == t2 + y2 * c`` must hold."""
    nizk = NonInteractiveProof(LinearSigmaProtocol(statement(group, g1, g2, y1, y2)))
    if not nizk.verify(list(proof.commitment), [proof.response]):
        logger.debug("Chaum-Pedersen proof rejected")
        return False
    return True


def prove_decryption(keypair, ciphertext, rng=None):
    """
    Decrypt and prove that the returned message is the correct decryption,
    i.e. ``pk = g * sk`` and ``c2 - m = c1 * sk``.
    """
    group = keypair.group
    message = ciphertext.c2 - ciphertext.c1 * keypair.secret_key
    proof = prove(
        group, keypair.secret_key,
        group.generator(), ciphertext.c1,
        keypair.public_key, ciphertext.c2 - message,
        rng,
    )
    return message, proof


def verify_decryption(group, public_key, ciphertext, message, proof):
    return verify(
        group,
        group.generator(), ciphertext.c1,
        public_key, ciphertext.c2 - message,
        proof,
    )
