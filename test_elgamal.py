#!/usr/bin/env python3
"""
Tests for key pairs, ElGamal and batched ElGamal.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import pytest

from elgamal import (
    Ciphertext,
    ElGamalN,
    KeyPair,
    decrypt,
    decrypt_n,
    encrypt,
    encrypt_n,
    rerandomize,
)
from groups import DeserializationError, ElementN, GroupP256
from test_drng import DeterministicRNG


G = GroupP256


def test_keypair_invariant():
    keypair = KeyPair.generate(G, DeterministicRNG(b"keypair"))
    assert keypair.public_key == G.generator() * keypair.secret_key


def test_keypair_serialization():
    keypair = KeyPair.generate(G, DeterministicRNG(b"keypair bytes"))
    data = keypair.serialize()
    assert len(data) == KeyPair.byte_length(G)
    assert KeyPair.deserialize(G, data) == keypair


def test_keypair_deserialize_rejects_mismatched_public_key():
    rng = DeterministicRNG(b"mismatch")
    first = KeyPair.generate(G, rng)
    second = KeyPair.generate(G, rng)
    data = G.serialize([first.public_key]) + G.ScalarField.serialize([second.secret_key])
    with pytest.raises(DeserializationError):
        KeyPair.deserialize(G, data)


def test_encrypt_decrypt_round_trip():
    rng = DeterministicRNG(b"round trip")
    keypair = KeyPair.generate(G, rng)
    for message in [G.random(rng), G.identity(), G.generator()]:
        ciphertext = encrypt(message, keypair, rng)
        assert decrypt(ciphertext, keypair) == message
        assert ciphertext.decrypt(keypair) == message


def test_encryption_is_randomized():
    rng = DeterministicRNG(b"randomized")
    keypair = KeyPair.generate(G, rng)
    message = G.random(rng)
    assert encrypt(message, keypair, rng) != encrypt(message, keypair, rng)


def test_wrong_key_does_not_decrypt():
    rng = DeterministicRNG(b"wrong key")
    keypair = KeyPair.generate(G, rng)
    other = KeyPair.generate(G, rng)
    message = G.random(rng)
    assert decrypt(encrypt(message, keypair, rng), other) != message


def test_homomorphic_combination():
    rng = DeterministicRNG(b"homomorphic")
    keypair = KeyPair.generate(G, rng)
    m1 = G.random(rng)
    m2 = G.random(rng)
    combined = encrypt(m1, keypair, rng) + encrypt(m2, keypair, rng)
    assert decrypt(combined, keypair) == m1 + m2


def test_scalar_multiplication_commutes():
    rng = DeterministicRNG(b"scalar ciphertext")
    keypair = KeyPair.generate(G, rng)
    message = G.random(rng)
    ciphertext = encrypt(message, keypair, rng)
    k = G.ScalarField.random(rng)
    assert k * ciphertext == ciphertext * k
    assert 3 * ciphertext == ciphertext + ciphertext + ciphertext
    assert decrypt(k * ciphertext, keypair) == message * k


def test_rerandomize_preserves_plaintext():
    rng = DeterministicRNG(b"rerandomize")
    keypair = KeyPair.generate(G, rng)
    message = G.random(rng)
    ciphertext = encrypt(message, keypair, rng)
    fresh = rerandomize(ciphertext, keypair.public_key, G.ScalarField.random(rng))
    assert fresh != ciphertext
    assert decrypt(fresh, keypair) == message


def test_ciphertext_serialization():
    rng = DeterministicRNG(b"ciphertext bytes")
    keypair = KeyPair.generate(G, rng)
    ciphertext = encrypt(G.random(rng), keypair, rng)
    data = ciphertext.serialize()
    assert len(data) == Ciphertext.byte_length(G) == 66
    assert Ciphertext.deserialize(G, data) == ciphertext
    with pytest.raises(DeserializationError):
        Ciphertext.deserialize(G, data + b"\x00")


def test_batched_round_trip():
    rng = DeterministicRNG(b"batched")
    keypair = KeyPair.generate(G, rng)
    messages = ElementN.uniform(G, 4, rng)
    ciphertexts = encrypt_n(messages, keypair, rng)
    assert len(ciphertexts) == 4
    assert decrypt_n(ciphertexts, keypair) == messages
    assert ciphertexts.decrypt(keypair) == messages
    for position in range(4):
        assert decrypt(ciphertexts[position], keypair) == messages[position]


def test_batched_serialization():
    rng = DeterministicRNG(b"batched bytes")
    keypair = KeyPair.generate(G, rng)
    ciphertexts = encrypt_n(ElementN.uniform(G, 3, rng), keypair, rng)
    data = ciphertexts.serialize()
    assert len(data) == ElGamalN.byte_length(G, 3)
    assert ElGamalN.deserialize(G, 3, data) == ciphertexts
    with pytest.raises(DeserializationError):
        ElGamalN.deserialize(G, 2, data)


def test_batched_zip_with_requires_equal_lengths():
    rng = DeterministicRNG(b"batched zip")
    keypair = KeyPair.generate(G, rng)
    three = encrypt_n(ElementN.uniform(G, 3, rng), keypair, rng)
    two = encrypt_n(ElementN.uniform(G, 2, rng), keypair, rng)
    summed = three.zip_with(three, lambda a, b: a + b)
    assert decrypt_n(summed, keypair)[0] == decrypt(three[0], keypair) * 2
    with pytest.raises(ValueError):
        three.zip_with(two, lambda a, b: a + b)
