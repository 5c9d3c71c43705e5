"""
Lambda handlers package for AWS Lambda functions.
"""
from .recommendation import handler

__all__ = ["handler"]
