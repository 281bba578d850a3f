"""Domain models for the chit fund."""

from chit_fund.models.base import Event

__all__ = ["Event"]
