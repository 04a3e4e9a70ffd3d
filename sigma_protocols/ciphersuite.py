"""
Ciphersuites: a group together with the sponge used for its challenges.
"""

from groups import GroupP256, GroupP256Keccak


CIPHERSUITE = {
    "P256_SHAKE128": GroupP256,
    "P256_KECCAK256": GroupP256Keccak,
}
