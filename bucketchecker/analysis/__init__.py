"""
Response analysis for read/write probes.
"""
