"""
Pure Python implementation of Fiat-Shamir transformation.
Converts interactive Sigma protocols to non-interactive zero-knowledge proofs.
"""


class NonInteractiveProof:
    """
    Fiat-Shamir driver for a Sigma protocol.

    The protocol must expose ``group`` (whose ``hash_to_scalar`` derives the
    challenge), ``challenge_slices(commitment)`` (the ordered transcript),
    ``prover_commit``, ``prover_response`` and ``verifier``.
    """

    def __init__(self, protocol):
        self.protocol = protocol

    def challenge(self, commitment):
        """Derive the challenge from the full transcript."""
        slices = self.protocol.challenge_slices(commitment)
        return self.protocol.group.hash_to_scalar(slices)

    def prove(self, witness, rng=None):
        """Generate a non-interactive proof as a (commitment, response) pair."""
        prover_state, commitment = self.protocol.prover_commit(witness, rng)
        challenge = self.challenge(commitment)
        response = self.protocol.prover_response(prover_state, challenge)
        return commitment, response

    def verify(self, commitment, response):
        """Verify non-interactive proof."""
        challenge = self.challenge(commitment)
        return self.protocol.verifier(commitment, challenge, response)
