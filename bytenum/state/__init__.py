"""
State layer.

Owned storage for integer magnitudes. Arithmetic never lives here; see
`bytenum/kernels/` for the byte-level algorithms.
"""

from .magnitude import Magnitude

__all__ = ["Magnitude"]
