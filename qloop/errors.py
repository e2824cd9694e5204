# qloop/errors.py
"""Exceptions raised by the register, its kernels and measurement."""


class QloopError(Exception):
    """Base class; every subclass also derives from the matching builtin."""


class InvalidQubitCountError(QloopError, ValueError):
    pass


class RegisterAllocationError(QloopError, MemoryError):
    pass


class QubitIndexError(QloopError, ValueError):
    pass


class SameQubitError(QloopError, ValueError):
    pass


class DegenerateMeasurementError(QloopError, ArithmeticError):
    pass


class NormalizationError(QloopError, AssertionError):
    pass
