"""
Target discovery: provider patterns, identifier classification and probe request building.
"""
