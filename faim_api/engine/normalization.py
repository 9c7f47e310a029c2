"""
Tensor normalization.

The FAIM API expects x as [batch, sequence_length, num_features]. Users can
send friendlier shapes:

- 1D [1, 2, 3]          -> [[[1], [2], [3]]]
- 2D [[1, 2], [3, 4]]   -> [[[1], [2], [3], [4]]]  (flattened row-major)
- 2D, multivariate      -> [[[1, 2], [3, 4]]]      ([sequence, features])
- 3D                    -> unchanged

A 2D array is ambiguous: it can be a long univariate series split into rows,
or a sequence of co-observed variables. The data cannot tell them apart, so
the caller decides with ``is_multivariate``, and only models that accept
multivariate input honour it.
"""

from typing import Any

import numpy as np

from faim_api.engine.catalog import supports_multivariate
from faim_api.engine.shape import get_array_shape
from faim_api.models.request import CanonicalTensor


def normalize_input(x: Any, model: str, is_multivariate: bool = False) -> CanonicalTensor:
    """
    Normalize a validated 1D, 2D or 3D array to the canonical 3D layout.

    Always returns a new nested list of floats; the input is not modified.

    Raises:
        ValueError: If x is empty, ragged, or not of rank 1-3. Validation
            rejects all of these, so this only fires on unvalidated input.
    """
    shape = get_array_shape(x)
    if not shape or 0 in shape:
        raise ValueError("Cannot normalize an empty time series")

    rank = len(shape)
    if rank > 3:
        raise ValueError(f"Time series data must have at most 3 dimensions, got {rank}")

    array = np.asarray(x, dtype=np.float64)
    if array.ndim != rank:
        raise ValueError(f"Time series data is ragged: expected shape {shape}")

    if rank == 3:
        return array.tolist()

    if rank == 2 and is_multivariate and supports_multivariate(model):
        # [sequence, features] -> [1, sequence, features]
        return array[np.newaxis, :, :].tolist()

    # 1D, or 2D treated as one univariate series: [1, n, 1]
    return array.reshape(1, -1, 1).tolist()
