"""
Concurrent probe runners.
"""
