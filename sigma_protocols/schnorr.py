"""
Schnorr proof of knowledge of a discrete logarithm.

Proves knowledge of ``x`` with ``y = g * x``. The challenge is
``H(g, y, t)``, the response is ``s = v + c * x`` and the verifier
checks ``g * s == t + y * c``.
"""

import logging
from dataclasses import dataclass, field

from fiat_shamir import NonInteractiveProof
from groups import DeserializationError
from .sigma_protocols import LinearRelation, LinearSigmaProtocol


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Proof:
    group: type = field(compare=False, repr=False)
    commitment: object
    response: object

    @classmethod
    def byte_length(cls, group):
        return group.element_byte_length() + group.ScalarField.scalar_byte_length()

    def serialize(self):
        return (
            self.group.serialize([self.commitment]) +
            self.group.ScalarField.serialize([self.response])
        )

    @classmethod
    def deserialize(cls, group, data):
        if len(data) != cls.byte_length(group):
            raise DeserializationError(
                f"expected {cls.byte_length(group)} bytes for a Schnorr proof, got {len(data)}"
            )
        element_length = group.element_byte_length()
        [commitment] = group.deserialize(data[:element_length])
        [response] = group.ScalarField.deserialize(data[element_length:])
        return cls(group, commitment, response)


def statement(group, public_y, generator=None):
    """The relation ``y = x * g``."""
    relation = LinearRelation(group)
    [var_x] = relation.allocate_scalars(1)
    [var_g, var_y] = relation.allocate_elements(2)
    relation.append_equation(var_y, [(var_x, var_g)])
    relation.set_elements([(var_g, generator if generator is not None else group.generator()), (var_y, public_y)])
    return relation


def prove(group, secret_x, public_y, rng=None):
    nizk = NonInteractiveProof(LinearSigmaProtocol(statement(group, public_y)))
    [commitment], [response] = nizk.prove([secret_x], rng)
    return Proof(group, commitment, response)


def verify(group, public_y, proof):
    nizk = NonInteractiveProof(LinearSigmaProtocol(statement(group, public_y)))
    if not nizk.verify([proof.commitment], [proof.response]):
        logger.debug("Schnorr proof rejected")
        return False
    return True
