#!/usr/bin/env python3
"""
Tests for the verifiable shuffle.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import pytest

from elgamal import ElGamalN, KeyPair, decrypt, encrypt
from groups import DeserializationError, ElementN, GroupP256
from sigma_protocols import ShuffleProof, ShuffleWitness, WitnessEncodingError, shuffle
from test_drng import DeterministicRNG


G = GroupP256


def shuffled(permutation, seed, distinct_keys=False):
    """Encrypt one message per input and shuffle; returns everything a test needs."""
    rng = DeterministicRNG(seed)
    n = len(permutation)
    if distinct_keys:
        keypairs = [KeyPair.generate(G, rng) for _ in range(n)]
    else:
        keypairs = [KeyPair.generate(G, rng)] * n
    messages = [G.random(rng) for _ in range(n)]
    # Input j is encrypted for the holder of the key at its output position
    ciphertexts = [
        encrypt(messages[j], keypairs[permutation[j]], rng)
        for j in range(n)
    ]
    public_keys = ElementN(G, [keypair.public_key for keypair in keypairs])
    instance, witness = shuffle.shuffle(G, ciphertexts, public_keys, permutation, rng)
    return instance, witness, keypairs, messages, rng


def test_shuffle_outputs_are_permuted_plaintexts():
    permutation = [2, 0, 1]
    instance, _, keypairs, messages, _ = shuffled(permutation, b"outputs")
    for j, message in enumerate(messages):
        output = instance.final[permutation[j]]
        assert output != instance.initial[j]
        assert decrypt(output, keypairs[permutation[j]]) == message


def test_shuffle_proof_verifies():
    instance, witness, _, _, rng = shuffled([2, 0, 1], b"shuffle proof")
    proof = shuffle.prove(instance, witness, rng)
    assert shuffle.verify(instance, proof)


def test_shuffle_proof_with_distinct_keys():
    instance, witness, keypairs, messages, rng = shuffled([1, 2, 0], b"distinct keys", distinct_keys=True)
    proof = shuffle.prove(instance, witness, rng)
    assert shuffle.verify(instance, proof)
    assert decrypt(instance.final[1], keypairs[1]) == messages[0]


@pytest.mark.parametrize("index", [0, 4, 7, 9, 10, 11])
def test_shuffle_tampered_response(index):
    instance, witness, _, _, rng = shuffled([2, 0, 1], b"tamper")
    proof = shuffle.prove(instance, witness, rng)

    responses = list(proof.responses)
    responses[index] = responses[index] + 1
    tampered = ShuffleProof(
        G, proof.chain, proof.chain_commitments,
        proof.reencryption_commitment, proof.aggregate_commitments, tuple(responses),
    )
    assert not shuffle.verify(instance, tampered)


def test_shuffle_tampered_commitments():
    instance, witness, _, _, rng = shuffled([2, 0, 1], b"tamper commitments")
    proof = shuffle.prove(instance, witness, rng)
    g = G.generator()

    chain = (proof.chain[0] + g,) + proof.chain[1:]
    tampered = ShuffleProof(
        G, chain, proof.chain_commitments,
        proof.reencryption_commitment, proof.aggregate_commitments, proof.responses,
    )
    assert not shuffle.verify(instance, tampered)

    c1, c2 = proof.reencryption_commitment
    tampered = ShuffleProof(
        G, proof.chain, proof.chain_commitments,
        (c1, c2 + g), proof.aggregate_commitments, proof.responses,
    )
    assert not shuffle.verify(instance, tampered)


def test_shuffle_proof_rejects_other_outputs():
    instance, witness, _, _, rng = shuffled([2, 0, 1], b"other outputs")
    proof = shuffle.prove(instance, witness, rng)

    keypair = KeyPair.generate(G, rng)
    final = list(instance.final)
    final[0] = encrypt(G.random(rng), keypair, rng)
    forged = shuffle.ShuffleInstance(
        G, instance.initial, ElGamalN(G, final), instance.public_keys,
        instance.permutation_commitments, instance.g, instance.h, instance.g_p, instance.h_p,
    )
    assert not shuffle.verify(forged, proof)


def test_shuffle_proof_rejects_wrong_permutation_witness():
    instance, witness, _, _, rng = shuffled([2, 0, 1], b"wrong permutation")
    wrong = ShuffleWitness(
        tuple(G.ScalarField.from_int(i) for i in [0, 1, 2]),
        witness.rerandomization,
        witness.commitment_randomness,
    )
    proof = shuffle.prove(instance, wrong, rng)
    assert not shuffle.verify(instance, proof)


@pytest.mark.parametrize("permutation", [[], [0]])
def test_degenerate_shuffles(permutation):
    instance, witness, _, _, rng = shuffled(permutation, b"degenerate")
    proof = shuffle.prove(instance, witness, rng)
    assert len(proof.responses) == 3 * len(permutation) + 3
    assert shuffle.verify(instance, proof)


def test_shuffle_proof_serialization():
    instance, witness, _, _, rng = shuffled([1, 0], b"shuffle bytes")
    proof = shuffle.prove(instance, witness, rng)

    data = proof.serialize()
    assert len(data) == ShuffleProof.byte_length(G, 2) == 9 * 33 + 9 * 32
    restored = ShuffleProof.deserialize(G, 2, data)
    assert restored == proof
    assert shuffle.verify(instance, restored)
    with pytest.raises(DeserializationError):
        ShuffleProof.deserialize(G, 3, data)


@pytest.mark.parametrize("indices", [[0, 3, 1], [0, 0, 1], [0, 1]])
def test_witness_encoding_errors_abort_proof(indices):
    instance, witness, _, _, rng = shuffled([2, 0, 1], b"encoding")
    bad = ShuffleWitness(
        tuple(G.ScalarField.from_int(i) for i in indices),
        witness.rerandomization,
        witness.commitment_randomness,
    )
    with pytest.raises(WitnessEncodingError):
        shuffle.prove(instance, bad, rng)


def test_negative_indices_abort_proof():
    instance, witness, _, _, rng = shuffled([2, 0, 1], b"negative")
    bad = ShuffleWitness((-1, 0, 1), witness.rerandomization, witness.commitment_randomness)
    with pytest.raises(WitnessEncodingError):
        shuffle.prove(instance, bad, rng)
    with pytest.raises(WitnessEncodingError):
        shuffle.decode_permutation([-1, 0, 1], 3)
    assert shuffle.decode_permutation([2, 0, 1], 3) == [2, 0, 1]


def test_shuffle_rejects_invalid_permutation():
    rng = DeterministicRNG(b"invalid permutation")
    keypair = KeyPair.generate(G, rng)
    ciphertexts = [encrypt(G.random(rng), keypair, rng) for _ in range(2)]
    public_keys = ElementN(G, [keypair.public_key] * 2)
    for permutation in ([0, 2], [1, 1], [-1, 0]):
        with pytest.raises(WitnessEncodingError):
            shuffle.shuffle(G, ciphertexts, public_keys, permutation, rng)


def test_instance_requires_matching_lengths():
    instance, _, _, _, _ = shuffled([1, 0], b"lengths")
    with pytest.raises(ValueError):
        shuffle.ShuffleInstance(
            G, instance.initial, instance.final, ElementN(G, list(instance.public_keys)[:1]),
            instance.permutation_commitments, instance.g, instance.h, instance.g_p, instance.h_p,
        )
