"""Hard-failure exceptions.

Only contract violations raise: a blank mandatory argument or an as-of date
that is not a real ISO date. Unknown documents, missing articles and repealed
statutes are reported as data plus warnings by the callers instead.
"""
from __future__ import annotations


class BeLawError(ValueError):
    pass


class InputError(BeLawError):
    """A mandatory argument is missing or blank."""


class AsOfDateError(BeLawError):
    """An as-of date failed ISO (YYYY-MM-DD) validation."""


class CorpusUnavailableError(RuntimeError):
    """The corpus database could not be opened."""


def require(value, name: str) -> str:
    if value is None or not str(value).strip():
        raise InputError(f"{name} is required")
    return str(value).strip()


__all__ = ['BeLawError', 'InputError', 'AsOfDateError', 'CorpusUnavailableError', 'require']
