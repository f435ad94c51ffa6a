"""
Substitution matrix used for reference-based compression of read bases.

The matrix is held in two forms: the packed 5 byte form written to the stream
header, and an expanded in-memory form for fast conversion between bases and
substitution codes while reading and writing records.

Upper and lower case reference bases resolve to the same substitute, but codes
are only *generated* for upper case reference bases.
"""
import logging
from dataclasses import dataclass

import numpy as np

from substitution_bases import (CODES_PER_BASE, ENCODED_MATRIX_SIZE, NO_BASE,
                                SUBSTITUTION_BASES, SYMBOL_SPACE_SIZE,
                                is_valid_symbol, lower_case, to_symbol)
from substitution_errors import (InvalidBaseError, LowerCaseReferenceError,
                                 SubstitutionMatrixError, UnresolvableCodeError)
from substitution_frequencies import build_frequencies
from substitution_ranking import (pack_code_vector, rank_substitutes,
                                  unpack_code_vector)

logger = logging.getLogger(__name__)


def _create_lookup_table():
    return np.zeros((SYMBOL_SPACE_SIZE, SYMBOL_SPACE_SIZE), dtype=np.uint8)


def _populate_codes(code_by_base, reference_base, ranked):
    for base, rank in ranked:
        code_by_base[reference_base, base] = rank


def _invert_codes(code_by_base, base_by_code):
    """Fill base_by_code[ref, code] = base from code_by_base[ref, base] = code."""
    for reference_base in SUBSTITUTION_BASES:
        for base in SUBSTITUTION_BASES:
            if base != reference_base:
                base_by_code[reference_base, code_by_base[reference_base, base]] = base


def _propagate_lower_case(base_by_code):
    # Other writers may emit substitutions against lower case reference bases
    for reference_base in SUBSTITUTION_BASES:
        base_by_code[lower_case(reference_base), :] = base_by_code[reference_base, :]


def _derive_codes(base_by_code, code_by_base):
    for reference_base in SUBSTITUTION_BASES:
        for code in range(CODES_PER_BASE):
            base = base_by_code[reference_base, code]
            if base != NO_BASE:
                code_by_base[reference_base, base] = code


@dataclass(frozen=True, eq=False, repr=False)
class SubstitutionMatrix:
    encoded: bytes
    code_by_base: np.ndarray
    base_by_code: np.ndarray

    def __post_init__(self):
        self.code_by_base.flags.writeable = False
        self.base_by_code.flags.writeable = False

    @classmethod
    def from_frequencies(cls, frequencies: np.ndarray) -> "SubstitutionMatrix":
        """
        Build a matrix from a (128, 128) table of substitution counts.
        The most frequent substitute of each reference base gets code 0.
        """
        if frequencies.shape != (SYMBOL_SPACE_SIZE, SYMBOL_SPACE_SIZE):
            raise SubstitutionMatrixError(
                f"Frequency table must have shape ({SYMBOL_SPACE_SIZE}, {SYMBOL_SPACE_SIZE}), "
                f"got {frequencies.shape}"
            )

        code_by_base = _create_lookup_table()
        base_by_code = _create_lookup_table()
        encoded = bytearray(ENCODED_MATRIX_SIZE)

        for idx, reference_base in enumerate(SUBSTITUTION_BASES):
            ranked = rank_substitutes(reference_base, frequencies[reference_base])
            _populate_codes(code_by_base, reference_base, ranked)
            encoded[idx] = pack_code_vector(ranked)

        _invert_codes(code_by_base, base_by_code)
        _propagate_lower_case(base_by_code)

        logger.debug(f"Built substitution matrix {bytes(encoded).hex()} from frequencies")
        return cls(bytes(encoded), code_by_base, base_by_code)

    @classmethod
    def from_records(cls, records) -> "SubstitutionMatrix":
        """Build a matrix from the substitution read features of a batch of records."""
        return cls.from_frequencies(build_frequencies(records))

    @classmethod
    def from_bytes(cls, matrix) -> "SubstitutionMatrix":
        """
        Rebuild a matrix from its 5 byte serialized form (e.g. read from a stream header).
        """
        if not isinstance(matrix, (bytes, bytearray, memoryview)):
            raise SubstitutionMatrixError(
                f"Encoded substitution matrix must be bytes-like, got {type(matrix).__name__}"
            )
        encoded = bytes(matrix)
        if len(encoded) != ENCODED_MATRIX_SIZE:
            raise SubstitutionMatrixError(
                f"Encoded substitution matrix must be {ENCODED_MATRIX_SIZE} bytes, got {len(encoded)}"
            )

        code_by_base = _create_lookup_table()
        base_by_code = _create_lookup_table()

        for idx, reference_base in enumerate(SUBSTITUTION_BASES):
            unpacked = unpack_code_vector(reference_base, encoded[idx])
            if sorted(code for _, code in unpacked) != list(range(CODES_PER_BASE)):
                logger.warning(
                    f"Substitution codes for base '{chr(reference_base)}' are not a permutation "
                    f"(byte {encoded[idx]:#04x}), some codes will not resolve"
                )
            for base, code in unpacked:
                base_by_code[reference_base, code] = base

        _propagate_lower_case(base_by_code)
        _derive_codes(base_by_code, code_by_base)

        logger.debug(f"Read substitution matrix {encoded.hex()}")
        return cls(encoded, code_by_base, base_by_code)

    def code(self, reference_base, base) -> int:
        """
        Substitution code for replacing reference_base with base.
        Only upper case reference bases have generated codes.
        """
        reference_base = to_symbol(reference_base)
        base = to_symbol(base)
        if not is_valid_symbol(reference_base):
            raise InvalidBaseError(
                f"Attempt to generate a substitution code for invalid reference base {reference_base!r}"
            )
        if chr(reference_base).islower():
            raise LowerCaseReferenceError(
                f"Attempt to generate a substitution code for lower case reference base '{chr(reference_base)}'"
            )
        if not is_valid_symbol(base):
            raise InvalidBaseError(
                f"Attempt to generate a substitution code for an invalid read base value {base!r}"
            )
        return int(self.code_by_base[reference_base, base])

    def base(self, reference_base, code: int) -> int:
        """
        Substitute base for a (reference_base, code) pair. Accepts upper or lower case reference bases.
        """
        reference_base = to_symbol(reference_base)
        if not is_valid_symbol(reference_base):
            raise InvalidBaseError(
                f"Attempt to retrieve a substitution base for invalid reference base {reference_base!r}"
            )
        base = NO_BASE
        if 0 <= code < CODES_PER_BASE:
            base = int(self.base_by_code[reference_base, code])
        if base == NO_BASE:
            raise UnresolvableCodeError(
                f"No substitution base for reference base '{chr(reference_base)}' and code {code}"
            )
        return base

    def encoded_bytes(self) -> bytes:
        return self.encoded

    def __str__(self):
        rows = []
        references = list(SUBSTITUTION_BASES) + [lower_case(b) for b in SUBSTITUTION_BASES]
        for reference_base in references:
            substitutes = ''.join(
                chr(int(b)) if b != NO_BASE else '.'
                for b in self.base_by_code[reference_base, :CODES_PER_BASE]
            )
            rows.append(f"{chr(reference_base)}:{substitutes}")
        return '\t'.join(rows)

    def __repr__(self):
        return f"SubstitutionMatrix(encoded={self.encoded.hex()})"
