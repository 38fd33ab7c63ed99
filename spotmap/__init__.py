"""
Spotmap - location engine beneath the Slushi map screen.
"""

__version__ = "1.0.0"
