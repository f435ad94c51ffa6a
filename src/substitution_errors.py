class SubstitutionMatrixError(ValueError):
    """Base class for malformed substitution data or misuse of a substitution matrix."""


class InvalidBaseError(SubstitutionMatrixError):
    """A non-positive (or out of symbol space) byte where a base was expected."""


class LowerCaseReferenceError(SubstitutionMatrixError):
    """Substitution codes are only generated for upper case reference bases."""


class UnresolvableCodeError(SubstitutionMatrixError):
    """
    No substitute base was assigned for a (reference base, code) pair.
    Usually means the matrix does not belong to the data being decoded.
    """
