"""
E-TernakID - Livestock record keeping.

Tracks each animal's identity, health, reproduction, growth and pedigree
in a hosted document store, with AI-assisted health-issue prediction.
"""

__version__ = "1.0.0"
