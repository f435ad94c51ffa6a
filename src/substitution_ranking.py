from typing import List, Tuple

import numpy as np

from substitution_bases import SUBSTITUTION_BASES, base_index


def rank_substitutes(reference_base: int, frequency_row: np.ndarray) -> List[Tuple[int, int]]:
    """
    Rank the possible substitutes of a reference base by how often they were observed.
    Highest frequency gets rank 0; equal frequencies fall back to alphabet order.
    Returns: [(substitute_base, rank), ...] for the 4 substitutes, in alphabet order
    """
    candidates = [(base, int(frequency_row[base]))
                  for base in SUBSTITUTION_BASES if base != reference_base]

    by_frequency = sorted(candidates, key=lambda c: (-c[1], base_index(c[0])))
    ranks = {base: rank for rank, (base, _) in enumerate(by_frequency)}

    # Back to the fixed order in which codes are emitted
    return sorted(((base, ranks[base]) for base, _ in candidates),
                  key=lambda r: base_index(r[0]))


def pack_code_vector(ranked: List[Tuple[int, int]]) -> int:
    """
    Pack 4 ranks into a single byte, 2 bits each, first substitute in the most significant bits.
    """
    code_vector = 0
    for _, rank in ranked:
        code_vector = (code_vector << 2) | rank
    return code_vector & 0xFF


def unpack_code_vector(reference_base: int, code_vector: int) -> List[Tuple[int, int]]:
    """
    Inverse of pack_code_vector for a given reference base.
    Returns: [(substitute_base, code), ...] in alphabet order
    """
    substitutes = [base for base in SUBSTITUTION_BASES if base != reference_base]
    shift = 2 * (len(substitutes) - 1)
    unpacked = []
    for base in substitutes:
        unpacked.append((base, (code_vector >> shift) & 3))
        shift -= 2
    return unpacked
