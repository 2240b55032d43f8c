"""`bytenum`: arbitrary-precision signed integers stored as little-endian byte buffers.

Layers, bottom up:
- `bytenum.kernels`: sign-unaware byte arithmetic (add, subtract, shift, multiply, divide),
- `bytenum.state`: the owned magnitude buffer,
- `bytenum.core`: `BigInt`, integer square root, primality and text conversion.

Public API:
- `BigInt` (construct from `int`, decimal text or little-endian bytes)
- `BigIntConfig`, `get_config()`, `set_config()`, `load_config(path)`
"""

from .config import BigIntConfig, get_config, load_config, set_config
from .core.bigint import BigInt
from .errors import DivisionByZeroError, InvalidDigitError, NegativeSquareRootError

__version__ = "0.1.0"

__all__ = [
    "BigInt",
    "BigIntConfig",
    "get_config",
    "set_config",
    "load_config",
    "DivisionByZeroError",
    "InvalidDigitError",
    "NegativeSquareRootError",
]
