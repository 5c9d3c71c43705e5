"""
Pydantic models shared by the recommendation services.
"""
