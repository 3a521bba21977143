"""Base selection operators consumed by the constraint-handling wrappers."""

from selection.ranking import best_first, best_of
from selection.tournament import random_select, tournament_select

__all__ = ["best_first", "best_of", "random_select", "tournament_select"]
