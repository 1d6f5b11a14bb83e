"""
Console reporting.
"""
