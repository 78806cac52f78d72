"""Errors raised while inverting a cached matrix."""


class InversionFailure(ValueError):
    """The stored matrix could not be inverted."""


class NonSquareMatrixError(InversionFailure):
    pass


class SingularMatrixError(InversionFailure):
    pass


class NonFiniteMatrixError(InversionFailure):
    """Matrix holds NaN or inf, e.g. a container that was never populated."""


class UnknownSolverError(KeyError):
    pass


class ConfigError(ValueError):
    pass
