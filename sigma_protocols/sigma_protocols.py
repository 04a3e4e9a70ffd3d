"""
Pure Python implementation of Sigma protocols for zero-knowledge proofs.
"""

import logging
from abc import ABC, abstractmethod
from collections import namedtuple


logger = logging.getLogger(__name__)


class SigmaProtocol(ABC):
    """
    Abstract base class for Sigma protocols.

    A Sigma protocol is a 3-message protocol that is special sound and
    honest-verifier zero-knowledge. Subclasses expose ``group`` and
    ``challenge_slices`` so that they can be driven by
    ``fiat_shamir.NonInteractiveProof``.
    """

    @abstractmethod
    def __init__(self, instance):
        raise NotImplementedError

    @abstractmethod
    def prover_commit(self, witness, rng=None):
        raise NotImplementedError

    @abstractmethod
    def prover_response(self, prover_state, challenge):
        raise NotImplementedError

    @abstractmethod
    def verifier(self, commitment, challenge, response):
        raise NotImplementedError

    @abstractmethod
    def challenge_slices(self, commitment):
        """Ordered byte strings hashed into the challenge."""
        raise NotImplementedError

    def simulate_response(self, rng=None):
        raise NotImplementedError

    def simulate_commitment(self, response, challenge):
        raise NotImplementedError


class LinearSigmaProtocol(SigmaProtocol):
    """
    Sigma protocol for linear relations (Schnorr-type proofs).

    Proves knowledge of scalars ``w`` such that ``linear_map(w) == image``.
    The response is ``nonce + challenge * w`` and the verifier checks
    ``commitment + image * challenge == linear_map(response)``.
    """

    ProverState = namedtuple("ProverState", ["witness", "nonces"])

    def __init__(self, instance):
        self.instance = instance
        self.group = instance.group

    def sample_nonces(self, witness, rng=None):
        return [
            self.instance.Domain.random(rng)
            for _ in range(self.instance.linear_map.num_scalars)
        ]

    def prover_commit(self, witness, rng=None):
        """Generate prover's first message (commitment)."""
        if len(witness) != self.instance.linear_map.num_scalars:
            raise ValueError(
                f"expected {self.instance.linear_map.num_scalars} witness scalars, got {len(witness)}"
            )
        nonces = self.sample_nonces(witness, rng)
        prover_state = self.ProverState(list(witness), nonces)
        commitment = self.instance.linear_map(nonces)
        return (prover_state, commitment)

    def prover_response(self, prover_state, challenge):
        """Generate prover's response to challenge."""
        witness, nonces = prover_state
        return [
            nonce + secret * challenge
            for nonce, secret in zip(nonces, witness)
        ]

    def verifier(self, commitment, challenge, response):
        """Return True iff every equation of the relation holds."""
        if len(commitment) != self.instance.linear_map.num_constraints:
            logger.debug("rejecting proof: %d commitments for %d equations",
                         len(commitment), self.instance.linear_map.num_constraints)
            return False
        if len(response) != self.instance.linear_map.num_scalars:
            logger.debug("rejecting proof: %d responses for %d scalars",
                         len(response), self.instance.linear_map.num_scalars)
            return False

        expected = self.instance.linear_map(response)
        for index, (t, image) in enumerate(zip(commitment, self.instance.image)):
            if t + image * challenge != expected[index]:
                logger.debug("rejecting proof: equation %d does not hold", index)
                return False
        return True

    def challenge_slices(self, commitment):
        """Every statement element, then every commitment element, one slice each."""
        serialize = self.instance.Image.serialize
        return (
            [serialize([element]) for element in self.instance.statement_elements()] +
            [serialize([element]) for element in commitment]
        )

    def serialize_commitment(self, commitment):
        return self.instance.Image.serialize(commitment)

    def serialize_response(self, response):
        return self.instance.Domain.serialize(response)

    def simulate_response(self, rng=None):
        """Simulate a random response (for zero-knowledge property)."""
        return [
            self.instance.Domain.random(rng)
            for _ in range(self.instance.linear_map.num_scalars)
        ]

    def simulate_commitment(self, response, challenge):
        """Simulate commitment given response and challenge."""
        return [
            expected - image * challenge
            for expected, image in zip(self.instance.linear_map(response), self.instance.image)
        ]


class LinearMap:
    """
    Linear morphism for Sigma protocols.
    Implements sparse matrix-vector multiplication.
    """

    LinearCombination = namedtuple("LinearCombination", ["scalar_indices", "element_indices"])

    def __init__(self, group):
        self.linear_combinations = []
        self.group_elements = []
        self.group = group
        self.num_scalars = 0
        self.num_elements = 0
        self.num_constraints = 0

    def __call__(self, scalars):
        """Apply the linear map to scalars."""
        return [
            self.group.msm(
                [scalars[scalar_idx] for scalar_idx in lc.scalar_indices],
                [self.group_elements[element_idx] for element_idx in lc.element_indices],
            )
            for lc in self.linear_combinations
        ]

    def add_constraint(self, scalar_indices, element_indices):
        """Add a linear constraint."""
        lc = self.LinearCombination(scalar_indices, element_indices)
        self.linear_combinations.append(lc)
        self.num_constraints += 1

    def set_elements(self, elements):
        """Set the group elements for the linear map."""
        self.group_elements = elements
        self.num_elements = len(elements)


class LinearRelation:
    """
    A system of equations ``lhs = sum(scalar_var * element_var)``.

    Variables are plain integer indices handed out by ``allocate_scalars``
    and ``allocate_elements``, in allocation order.
    """

    def __init__(self, group):
        self.group = group
        self.Domain = group.ScalarField
        self.Image = group
        self.linear_map = LinearMap(group)

        self.num_element_vars = 0
        self.element_values = {}
        self.image_vars = []

    def allocate_scalars(self, count):
        """Allocate scalar variables."""
        start = self.linear_map.num_scalars
        self.linear_map.num_scalars += count
        return list(range(start, start + count))

    def allocate_elements(self, count):
        """Allocate element variables."""
        start = self.num_element_vars
        self.num_element_vars += count
        return list(range(start, start + count))

    def set_elements(self, assignments):
        """Set values for element variables."""
        for var_id, value in assignments:
            self.element_values[var_id] = value
        self.linear_map.set_elements([
            self.element_values.get(var_id) for var_id in range(self.num_element_vars)
        ])

    def append_equation(self, lhs_element, rhs_terms):
        """
        Add an equation: lhs_element = sum(scalar * element for scalar, element in rhs_terms)
        """
        self.image_vars.append(lhs_element)
        self.linear_map.add_constraint(
            [scalar_var for scalar_var, _ in rhs_terms],
            [element_var for _, element_var in rhs_terms],
        )

    @property
    def image(self):
        """Get the image elements (LHS of equations)."""
        return [self.element_values[var_id] for var_id in self.image_vars]

    def statement_elements(self):
        """All element values in allocation order."""
        return [self.element_values[var_id] for var_id in range(self.num_element_vars)]
