"""jsm: MATLAB-style dense N-d matrices over typed NumPy buffers.

Modules:
    types: Element types, typed-buffer dispatch and cast rules
    view: Strided N-d views (select, permute, flips) over flat buffers
    matrix: The Matrix container (real or split complex storage) and its constructors
    elementary: Elementwise math, operators, comparisons and reductions
    io: Packed RAW image reader and loader/renderer protocols
    accel: JAX bridge running jit-compiled effects on matrices
    config: Environment-driven settings
    log: Logging helpers
"""

__version__ = "0.1.0"
