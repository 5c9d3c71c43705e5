"""
CycleFit: cycle-aware workout and nutrition recommendations.
"""
__version__ = "0.1.0"
