"""Result memoization shared by growth and profitability calculations."""

from .result_cache import ResultCache, make_key

__all__ = ["ResultCache", "make_key"]
