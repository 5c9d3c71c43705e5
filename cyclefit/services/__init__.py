"""
Recommendation services: cycle calculation, phase resolution, modifier
pipeline and assembly.
"""
