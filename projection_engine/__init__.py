"""
Projection Engine - Financial Projection & Profitability Engine

Pure numeric functions that turn business assumptions (growth rate,
seasonality, cost structure, cash-flow schedule) into revenue projections,
break-even points and investment profitability metrics.
"""

from .engine import ProjectionEngine

__version__ = "0.1.0"
__author__ = "Projection Engine Team"

__all__ = ["ProjectionEngine"]
