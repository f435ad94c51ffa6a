import pytest

from data_structures import CompressionRecord, ReadFeature, Substitution
from substitution_bases import SUBSTITUTION_BASES
from substitution_matrix import SubstitutionMatrix


def make_substitutions(reference, counts, start_position=0):
    """Substitution features for one reference base, e.g. counts={'G': 10, 'C': 5}."""
    features = []
    position = start_position
    for base, count in counts.items():
        for _ in range(count):
            features.append(Substitution(position=position, reference_base=ord(reference), base=ord(base)))
            position += 1
    return features


@pytest.fixture
def base_symbols():
    """The five substitution bases as characters, in matrix order."""
    return [chr(b) for b in SUBSTITUTION_BASES]


@pytest.fixture
def adenine_records():
    """Records observing A->G x10, A->C x5, A->T x2 and no A->N."""
    features = make_substitutions('A', {'G': 10, 'C': 5, 'T': 2})
    return [
        CompressionRecord(index=0, read_features=features[:8] + [ReadFeature(position=40, operator='I')]),
        CompressionRecord(index=1, read_features=None),
        CompressionRecord(index=2, read_features=features[8:]),
    ]


@pytest.fixture
def adenine_matrix(adenine_records):
    return SubstitutionMatrix.from_records(adenine_records)


@pytest.fixture
def mixed_records():
    """Substitutions for every reference base with distinct, uneven frequencies."""
    features = (make_substitutions('A', {'T': 4, 'N': 1})
                + make_substitutions('C', {'T': 9, 'A': 2, 'G': 2})
                + make_substitutions('G', {'A': 6, 'N': 3, 'C': 1})
                + make_substitutions('T', {'C': 8, 'G': 7})
                + make_substitutions('N', {'T': 5, 'G': 5, 'A': 1}))
    return [CompressionRecord(index=i, read_features=features[i::3]) for i in range(3)]
