"""
Utility helpers shared across handlers and services.
"""
