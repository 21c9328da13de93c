"""
Contract checks for the geometry primitives.

The distance, bearing and projection functions are pure math with no recoverable error
path. Passing an unset coordinate, or ending up with an invalid nearest point, is a
programming error in the caller. These helpers turn such errors into typed exceptions
while contract checks are enabled (`contracts.enabled`, default on). With checks off
the functions run unguarded, like a release build.
"""

from __future__ import annotations

from roadsnap.config.settings import get_settings


class ContractViolation(AssertionError):
    """A geometry contract does not hold."""


class PreconditionViolation(ContractViolation):
    """The caller passed an argument the function is not defined for."""


class PostconditionViolation(ContractViolation):
    """The function produced a result outside its documented range."""


def contracts_enabled() -> bool:
    return get_settings().contracts.enabled


def require(condition: bool, message: str) -> None:
    """Raise `PreconditionViolation` when `condition` is false and checks are enabled."""
    if not condition and contracts_enabled():
        raise PreconditionViolation(message)


def ensure(condition: bool, message: str) -> None:
    """Raise `PostconditionViolation` when `condition` is false and checks are enabled."""
    if not condition and contracts_enabled():
        raise PostconditionViolation(message)
