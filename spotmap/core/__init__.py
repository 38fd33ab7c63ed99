"""
Core infrastructure: exceptions, logging and timers.
"""
