"""
Core models, field rules and row schemas.
"""
