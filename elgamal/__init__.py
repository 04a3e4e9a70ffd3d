"""
ElGamal encryption subpackage.
"""

from .keys import KeyPair
from .ciphertext import Ciphertext, encrypt, encrypt_with_randomness, decrypt, rerandomize
from .batch import ElGamalN, encrypt_n, decrypt_n

__all__ = [
    'KeyPair',
    'Ciphertext',
    'encrypt',
    'encrypt_with_randomness',
    'decrypt',
    'rerandomize',
    'ElGamalN',
    'encrypt_n',
    'decrypt_n'
]
