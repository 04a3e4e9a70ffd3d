"""
Groups subpackage for cryptographic groups and mathematical primitives.
"""

from .base import DeserializationError, Field, Group, ScalarField
from .p256 import GroupP256, GroupP256Keccak, P256ScalarField
from .product import Product, ElementN
from .field import GF, PrimeFieldElement
from .elliptic_curve import EllipticCurve, EllipticCurvePoint

__all__ = [
    'DeserializationError', 'Field', 'Group', 'ScalarField',
    'GroupP256', 'GroupP256Keccak', 'P256ScalarField',
    'Product', 'ElementN',
    'GF', 'PrimeFieldElement',
    'EllipticCurve', 'EllipticCurvePoint'
]
