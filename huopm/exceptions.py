"""Errors raised while validating HUOPM inputs."""

from __future__ import annotations


class HUOPMError(Exception):
    """Base class for every error raised by huopm."""


class InvalidQuantity(HUOPMError, ValueError):
    """A transaction entry has a non-positive or non-numeric quantity."""


class DuplicateItem(HUOPMError, ValueError):
    """A transaction lists the same item more than once."""


class InvalidProfit(HUOPMError, ValueError):
    """A profit table entry is negative or not a finite number."""


class InvalidThreshold(HUOPMError, ValueError):
    """``min_util`` is not positive, ``min_occ`` is outside ``[0, 1]`` or ``max_len`` is invalid."""


class MiningCancelled(HUOPMError):
    """The ``should_stop`` callback asked the search to abort."""
