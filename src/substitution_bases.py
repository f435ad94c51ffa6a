import numpy as np

from substitution_errors import InvalidBaseError

# Substitution bases in the order they are stored in the encoded matrix.
# The position is also the tie-break key when ranking substitutions.
SUBSTITUTION_BASES = (ord('A'), ord('C'), ord('G'), ord('T'), ord('N'))

BASES_SIZE = len(SUBSTITUTION_BASES)

# Possible substitution codes per reference base
CODES_PER_BASE = BASES_SIZE - 1

# One packed byte per reference base
ENCODED_MATRIX_SIZE = BASES_SIZE

# Bases are single bytes drawn from positive values, so the lookup tables
# cover 128 symbols even though only 10 (upper and lower case) are used
SYMBOL_SPACE_SIZE = 128

NO_BASE = 0

_BASE_INDEX = {base: idx for idx, base in enumerate(SUBSTITUTION_BASES)}


def base_index(base: int) -> int:
    """
    Ordinal of a substitution base within SUBSTITUTION_BASES.
    Raises KeyError for symbols outside the alphabet.
    """
    return _BASE_INDEX[base]


def to_symbol(value) -> int:
    """Normalise an int, 1-char str or 1-byte bytes/bytearray to its byte value."""
    if isinstance(value, (str, bytes, bytearray)):
        if len(value) != 1:
            raise InvalidBaseError(f"Expected a single base symbol, got {value!r}")
        return ord(value)
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidBaseError(f"Base symbols must be integer byte values, got {value!r}")
    return int(value)


def is_valid_symbol(base: int) -> bool:
    return 0 < base < SYMBOL_SPACE_SIZE


def lower_case(base: int) -> int:
    return ord(chr(base).lower())

