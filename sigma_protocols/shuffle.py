"""
Verifiable shuffle of ElGamal ciphertexts.

Statement: output ciphertexts ``C'`` are a secret permutation ``pi`` of the
input ciphertexts ``C``, each re-randomized under the public key of the
position it lands in:

    C'[pi(j)] = C[j] + (g, pk[pi(j)]) * r'[j]

The permutation is bound by commitments ``P[j] = g_P * k[j] + H[pi(j)]``,
where ``H[i]`` are independent per-position bases derived from ``h_P``.
Column ``j`` of the permutation matrix is thus committed in ``P[j]``.

The argument is the permutation-matrix technique of Terelius and Wikstrom.
Statement-derived weights ``e[j]`` are permuted to ``e'[i] = e[pi^-1(i)]``
and the prover shows knowledge of ``e'`` such that

* ``sum(P) - sum(H) = g_P * K``                  (columns sum to one)
* ``sum(e[j] * P[j]) = g_P * rbar + sum(e'[i] * H[i])``
* ``prod(e') == prod(e)``, through a commitment chain
  ``A[i] = g_P * rhat[i] + A[i-1] * e'[i]`` with ``A[-1] = h``
* ``sum(e[j] * C[j]) = sum(e'[i] * C'[i]) - sum(z[i] * (g, pk[i]))``

All of these are linear in the witness and are proven together: one
commitment per equation, a single challenge ``x`` over the whole
transcript, and responses ``nonce - x * witness``.
"""

import logging
from collections import namedtuple
from dataclasses import dataclass, field

from elgamal import Ciphertext, ElGamalN, rerandomize
from fiat_shamir import I2OSP, NonInteractiveProof
from groups import DeserializationError, ElementN
from .sigma_protocols import LinearRelation, SigmaProtocol


logger = logging.getLogger(__name__)

# Positions are encoded on four bytes when deriving bases and weights
MAX_SHUFFLE_SIZE = 2**32 - 1


class WitnessEncodingError(ValueError):
    """The permutation in a shuffle witness is not a permutation of [0, N)."""


@dataclass(frozen=True)
class ShuffleInstance:
    """Public statement of a shuffle."""

    group: type = field(compare=False, repr=False)
    initial: ElGamalN
    final: ElGamalN
    public_keys: ElementN
    permutation_commitments: ElementN
    g: object
    h: object
    g_p: object
    h_p: object

    def __post_init__(self):
        n = len(self.initial)
        if n > MAX_SHUFFLE_SIZE:
            raise ValueError(f"shuffles of more than {MAX_SHUFFLE_SIZE} ciphertexts are not supported")
        for name in ("final", "public_keys", "permutation_commitments"):
            if len(getattr(self, name)) != n:
                raise ValueError(f"{name} has length {len(getattr(self, name))}, expected {n}")

    @property
    def size(self):
        return len(self.initial)

    def position_bases(self):
        return position_bases(self.group, self.h_p, self.size)

    def challenge_slices(self):
        serialize = self.group.serialize
        return [
            serialize([self.g]),
            serialize([self.h]),
            serialize([self.g_p]),
            serialize([self.h_p]),
            self.initial.serialize(),
            self.final.serialize(),
            self.public_keys.serialize(),
            self.permutation_commitments.serialize(),
        ]


@dataclass(frozen=True, repr=False)
class ShuffleWitness:
    """
    Secret witness: ``permutation[j]`` is ``pi(j)`` encoded as a scalar,
    ``rerandomization[j]`` is ``r'[j]`` and ``commitment_randomness[j]`` is
    ``k[j]``. Never serialized.
    """

    permutation: tuple
    rerandomization: tuple
    commitment_randomness: tuple


@dataclass(frozen=True)
class ShuffleProof:
    """
    ``chain`` (A) and ``chain_commitments`` (B) hold one element per
    position; ``reencryption_commitment`` (S) is a pair and
    ``aggregate_commitments`` (T) holds three elements. ``responses`` are
    the ``3N + 3`` scalars ``s'``, ``shat``, ``s_z``, ``s_K``, ``s_rbar``
    and ``s_rhat``.
    """

    group: type = field(compare=False, repr=False)
    chain: tuple
    chain_commitments: tuple
    reencryption_commitment: tuple
    aggregate_commitments: tuple
    responses: tuple

    @classmethod
    def byte_length(cls, group, n):
        return (
            (2 * n + 5) * group.element_byte_length() +
            (3 * n + 3) * group.ScalarField.scalar_byte_length()
        )

    def serialize(self):
        return (
            self.group.serialize(
                self.chain + self.chain_commitments +
                self.reencryption_commitment + self.aggregate_commitments
            ) +
            self.group.ScalarField.serialize(self.responses)
        )

    @classmethod
    def deserialize(cls, group, n, data):
        if len(data) != cls.byte_length(group, n):
            raise DeserializationError(
                f"expected {cls.byte_length(group, n)} bytes for a shuffle of {n}, got {len(data)}"
            )
        split = (2 * n + 5) * group.element_byte_length()
        elements = tuple(group.deserialize(data[:split]))
        return cls(
            group,
            elements[:n],
            elements[n:2 * n],
            elements[2 * n:2 * n + 2],
            elements[2 * n + 2:],
            tuple(group.ScalarField.deserialize(data[split:])),
        )


def default_generators(group):
    """Independent ``(h, g_P, h_P)`` with unknown discrete logarithms."""
    return tuple(
        group.hash_to_element(b"shuffle generator " + label)
        for label in (b"h", b"g_P", b"h_P")
    )


def position_bases(group, h_p, n):
    prefix = group.serialize([h_p])
    return [group.hash_to_element(prefix + I2OSP(i, 4)) for i in range(n)]


def decode_permutation(scalars, n):
    """Decode scalar-encoded indices, aborting on anything but a permutation of [0, n)."""
    if len(scalars) != n:
        raise WitnessEncodingError(f"permutation has {len(scalars)} entries, expected {n}")
    permutation = []
    for position, scalar in enumerate(scalars):
        index = int(scalar)
        if not 0 <= index < n:
            raise WitnessEncodingError(
                f"index {index} at position {position} is out of range for {n} ciphertexts"
            )
        permutation.append(index)
    if len(set(permutation)) != n:
        raise WitnessEncodingError("permutation repeats an index")
    return permutation


def invert_permutation(permutation):
    inverse = [0] * len(permutation)
    for j, i in enumerate(permutation):
        inverse[i] = j
    return inverse


def apply_permutation(items, permutation):
    """Move ``items[j]`` to position ``permutation[j]``."""
    result = [None] * len(items)
    for j, item in enumerate(items):
        result[permutation[j]] = item
    return result


def commit_permutation(group, permutation, randomness, g_p, h_p):
    """``P[j] = g_P * k[j] + H[pi(j)]``."""
    bases = position_bases(group, h_p, len(permutation))
    return ElementN(group, [
        g_p * k + bases[index]
        for index, k in zip(permutation, randomness)
    ])


def permutation_weights(instance):
    """Statement-derived weights ``e[j]``, one per input position."""
    group = instance.group
    seed = group.hash_to_scalar(instance.challenge_slices() + [b"permutation-challenge"])
    seed_bytes = group.ScalarField.serialize([seed])
    return [
        group.hash_to_scalar([seed_bytes, I2OSP(j, 4)])
        for j in range(instance.size)
    ]


class ShuffleProtocol(SigmaProtocol):
    """
    Sigma protocol for a shuffle instance.

    The commitment is ``(chain, images)`` where ``images`` holds, in
    order, the N chain commitments, the two re-encryption coordinates and
    the three aggregate permutation commitments.
    """

    ProverState = namedtuple("ProverState", ["witness", "nonces"])

    def __init__(self, instance):
        self.instance = instance
        self.group = instance.group
        self.bases = instance.position_bases()
        self.weights = permutation_weights(instance)

    def relation(self, chain):
        """Linear relation of the statement extended with the prover's chain."""
        instance = self.instance
        group = self.group
        n = instance.size

        relation = LinearRelation(group)
        e_prime = relation.allocate_scalars(n)
        chain_randomness = relation.allocate_scalars(n)
        z = relation.allocate_scalars(n)
        [var_k, var_rbar, var_rhat] = relation.allocate_scalars(3)

        [var_g_p, var_h, var_neg_g] = relation.allocate_elements(3)
        var_chain = relation.allocate_elements(n)
        var_bases = relation.allocate_elements(n)
        var_final_c1 = relation.allocate_elements(n)
        var_final_c2 = relation.allocate_elements(n)
        var_neg_pk = relation.allocate_elements(n)
        [var_weighted_c1, var_weighted_c2, var_column_sum, var_weighted_sum, var_chain_end] = (
            relation.allocate_elements(5)
        )

        # A[i] = g_P * rhat[i] + A[i-1] * e'[i]
        for i in range(n):
            var_previous = var_chain[i - 1] if i > 0 else var_h
            relation.append_equation(var_chain[i], [(chain_randomness[i], var_g_p), (e_prime[i], var_previous)])

        # sum(e[j] * C[j]) = sum(e'[i] * C'[i]) - sum(z[i] * (g, pk[i]))
        relation.append_equation(
            var_weighted_c1,
            [(e_prime[i], var_final_c1[i]) for i in range(n)] + [(z[i], var_neg_g) for i in range(n)],
        )
        relation.append_equation(
            var_weighted_c2,
            [(e_prime[i], var_final_c2[i]) for i in range(n)] + [(z[i], var_neg_pk[i]) for i in range(n)],
        )

        relation.append_equation(var_column_sum, [(var_k, var_g_p)])
        relation.append_equation(
            var_weighted_sum,
            [(var_rbar, var_g_p)] + [(e_prime[i], var_bases[i]) for i in range(n)],
        )
        relation.append_equation(var_chain_end, [(var_rhat, var_g_p)])

        weighted = Ciphertext.zero(group)
        column_sum = group.identity()
        weighted_sum = group.identity()
        weight_product = group.ScalarField.one()
        for j in range(n):
            weighted = weighted + instance.initial[j] * self.weights[j]
            column_sum = column_sum + instance.permutation_commitments[j] - self.bases[j]
            weighted_sum = weighted_sum + instance.permutation_commitments[j] * self.weights[j]
            weight_product = weight_product * self.weights[j]
        chain_end = (chain[-1] if n else instance.h) - instance.h * weight_product

        relation.set_elements(
            [(var_g_p, instance.g_p), (var_h, instance.h), (var_neg_g, -instance.g)] +
            list(zip(var_chain, chain)) +
            list(zip(var_bases, self.bases)) +
            list(zip(var_final_c1, [ciphertext.c1 for ciphertext in instance.final])) +
            list(zip(var_final_c2, [ciphertext.c2 for ciphertext in instance.final])) +
            list(zip(var_neg_pk, [-public_key for public_key in instance.public_keys])) +
            [
                (var_weighted_c1, weighted.c1),
                (var_weighted_c2, weighted.c2),
                (var_column_sum, column_sum),
                (var_weighted_sum, weighted_sum),
                (var_chain_end, chain_end),
            ]
        )
        return relation

    def prover_commit(self, witness, rng=None):
        instance = self.instance
        group = self.group
        n = instance.size

        permutation = decode_permutation(witness.permutation, n)
        if len(witness.rerandomization) != n or len(witness.commitment_randomness) != n:
            raise ValueError(f"witness randomness must have {n} entries")
        inverse = invert_permutation(permutation)

        e_prime = [self.weights[inverse[i]] for i in range(n)]
        chain_randomness = [group.ScalarField.random(rng) for _ in range(n)]

        chain = []
        previous = instance.h
        rhat = group.ScalarField.zero()
        for i in range(n):
            previous = instance.g_p * chain_randomness[i] + previous * e_prime[i]
            rhat = rhat * e_prime[i] + chain_randomness[i]
            chain.append(previous)

        z = [e_prime[i] * witness.rerandomization[inverse[i]] for i in range(n)]
        k_sum = group.ScalarField.zero()
        rbar = group.ScalarField.zero()
        for j in range(n):
            k_sum = k_sum + witness.commitment_randomness[j]
            rbar = rbar + self.weights[j] * witness.commitment_randomness[j]

        secrets = e_prime + chain_randomness + z + [k_sum, rbar, rhat]
        relation = self.relation(chain)
        nonces = [group.ScalarField.random(rng) for _ in secrets]
        images = relation.linear_map(nonces)
        return self.ProverState(secrets, nonces), (tuple(chain), tuple(images))

    def prover_response(self, prover_state, challenge):
        secrets, nonces = prover_state
        return [nonce - challenge * secret for nonce, secret in zip(nonces, secrets)]

    def verifier(self, commitment, challenge, response):
        """Every per-position and aggregate equation must hold."""
        n = self.instance.size
        chain, images = commitment
        if len(chain) != n or len(images) != n + 5 or len(response) != 3 * n + 3:
            logger.debug("rejecting shuffle proof: wrong number of components for a shuffle of %d", n)
            return False

        relation = self.relation(chain)
        expected = relation.linear_map(response)
        for index, (t, image, rhs) in enumerate(zip(images, relation.image, expected)):
            if t != image * challenge + rhs:
                if index < n:
                    logger.debug("rejecting shuffle proof: chain equation %d does not hold", index)
                elif index < n + 2:
                    logger.debug("rejecting shuffle proof: re-encryption coordinate %d does not hold", index - n)
                else:
                    logger.debug("rejecting shuffle proof: permutation equation %d does not hold", index - n - 2)
                return False
        return True

    def challenge_slices(self, commitment):
        """Instance fields, then A, B, S and T."""
        n = self.instance.size
        chain, images = commitment
        serialize = self.group.serialize
        return self.instance.challenge_slices() + [
            serialize(chain),
            serialize(images[:n]),
            serialize(images[n:n + 2]),
            serialize(images[n + 2:]),
        ]


def shuffle(group, ciphertexts, public_keys, permutation, rng=None, generators=None):
    """
    Permute and re-randomize ``ciphertexts``, where ``permutation[j]`` is the
    output position of input ``j`` and ``public_keys`` are indexed by output
    position. Returns ``(instance, witness)``.
    """
    n = len(ciphertexts)
    # Negative indices wrap to huge scalars and are rejected when decoding
    scalars = [group.ScalarField.from_int(index) for index in permutation]
    permutation = decode_permutation(scalars, n)
    if len(public_keys) != n:
        raise ValueError(f"expected {n} public keys, got {len(public_keys)}")

    h, g_p, h_p = generators if generators is not None else default_generators(group)
    g = group.generator()

    rerandomization = [group.ScalarField.random(rng) for _ in range(n)]
    commitment_randomness = [group.ScalarField.random(rng) for _ in range(n)]

    final = apply_permutation([
        rerandomize(ciphertexts[j], public_keys[permutation[j]], rerandomization[j], g)
        for j in range(n)
    ], permutation)

    instance = ShuffleInstance(
        group,
        ElGamalN(group, ciphertexts),
        ElGamalN(group, final),
        ElementN(group, public_keys),
        commit_permutation(group, permutation, commitment_randomness, g_p, h_p),
        g, h, g_p, h_p,
    )
    witness = ShuffleWitness(tuple(scalars), tuple(rerandomization), tuple(commitment_randomness))
    return instance, witness


def prove(instance, witness, rng=None):
    """Raises WitnessEncodingError before any proof material is produced."""
    nizk = NonInteractiveProof(ShuffleProtocol(instance))
    (chain, images), responses = nizk.prove(witness, rng)
    n = instance.size
    logger.debug("generated shuffle proof for %d ciphertexts", n)
    return ShuffleProof(
        instance.group,
        chain,
        images[:n],
        images[n:n + 2],
        images[n + 2:],
        tuple(responses),
    )


def verify(instance, proof):
    nizk = NonInteractiveProof(ShuffleProtocol(instance))
    commitment = (
        tuple(proof.chain),
        tuple(proof.chain_commitments) + tuple(proof.reencryption_commitment) +
        tuple(proof.aggregate_commitments),
    )
    return nizk.verify(commitment, list(proof.responses))
