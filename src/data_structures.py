from dataclasses import dataclass, field
from typing import List, Optional

# Read feature operator for a single-base substitution
SUBSTITUTION_OPERATOR = 'X'


@dataclass
class ReadFeature:
    position: int
    operator: str


@dataclass
class Substitution(ReadFeature):
    """
    A read base that differs from the reference base at the same position.
    Bases are single-byte symbol values (e.g. ord('A')).
    """
    operator: str = SUBSTITUTION_OPERATOR
    reference_base: int = 0
    base: int = 0


@dataclass
class CompressionRecord:
    index: int
    read_features: Optional[List[ReadFeature]] = field(default=None)

def iter_substitutions(records):
    """
    Yield (reference_base, base) pairs for every substitution feature in the records.
    Records without read features are skipped.
    """
    for record in records:
        if record.read_features is None:
            continue
        for feature in record.read_features:
            if feature.operator == SUBSTITUTION_OPERATOR:
                yield feature.reference_base, feature.base
