"""
Data layer for mlogit.

Includes:
- Response column resolution, X/Y splitting and model alignment (`schema`)
- CSV loading utilities (`data_loader`)
"""
