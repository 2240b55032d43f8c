"""
Kernel layer.

Sign-unaware byte-level arithmetic on little-endian magnitude buffers:
- `bytewise`: compare, add, subtract, bit shifts,
- `multiply`: schoolbook multiplication and multiply-by-small-constant,
- `divide`: binary long division with a cached set of shifted divisors.

Kernels never allocate behind the caller's back when an `*_into` variant is
used; the plain variants return a fresh buffer together with its length.
"""
