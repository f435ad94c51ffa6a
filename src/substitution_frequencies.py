import logging
from typing import Iterable, Tuple

import numpy as np
from numba import njit

from data_structures import iter_substitutions
from substitution_bases import SYMBOL_SPACE_SIZE, to_symbol
from substitution_errors import InvalidBaseError

logger = logging.getLogger(__name__)


@njit
def _accumulate_pairs(reference_bases, bases, frequencies):
    for i in range(reference_bases.shape[0]):
        frequencies[reference_bases[i], bases[i]] += 1


def create_frequency_table():
    """
    Empty substitution frequency table covering the whole symbol space.
    Returns: np.ndarray of shape (128, 128) with int64 counts
    """
    return np.zeros((SYMBOL_SPACE_SIZE, SYMBOL_SPACE_SIZE), dtype=np.int64)


def tally_substitutions(observations: Iterable[Tuple[int, int]]) -> np.ndarray:
    """
    Count (reference_base, base) substitution observations.
    Any non-positive base aborts the whole tally, since it means the observation stream is corrupt.
    Returns: np.ndarray of shape (128, 128), indexed by [reference_base, base]
    """
    reference_list = []
    base_list = []
    for reference_base, base in observations:
        reference_list.append(to_symbol(reference_base))
        base_list.append(to_symbol(base))

    reference_bases = np.array(reference_list, dtype=np.int64)
    bases = np.array(base_list, dtype=np.int64)

    invalid = ((reference_bases <= 0) | (reference_bases >= SYMBOL_SPACE_SIZE) |
               (bases <= 0) | (bases >= SYMBOL_SPACE_SIZE))
    if np.any(invalid):
        idx = int(np.argmax(invalid))
        raise InvalidBaseError(
            f"Attempt to generate a substitution code for invalid base pair "
            f"({reference_list[idx]}, {base_list[idx]}) at observation {idx}"
        )

    frequencies = create_frequency_table()
    _accumulate_pairs(reference_bases, bases, frequencies)

    logger.debug(f"Tallied {len(reference_list):,} substitutions")
    return frequencies


def build_frequencies(records) -> np.ndarray:
    """
    Count substitutions across the read features of a batch of compression records.
    Returns: np.ndarray of shape (128, 128), indexed by [reference_base, base]
    """
    return tally_substitutions(iter_substitutions(records))
