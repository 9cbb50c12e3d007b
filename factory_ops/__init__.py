"""
factory-ops: spreadsheet import validation and heuristic operations insights
for a small manufacturing business.
"""

__version__ = "0.1.0"
