"""
E-TernakID - HTTP API.
"""
