"""
Personal Finance Calculator Engine

Pure financial formulas (amortization, growth, options, portfolio statistics,
debt payoff) with a thin FastAPI surface.
"""

__version__ = "0.1.0"
