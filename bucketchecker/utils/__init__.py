"""
Configuration, HTTP transport and input helpers.
"""
