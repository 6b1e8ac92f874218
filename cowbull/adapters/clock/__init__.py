"""Clock adapters.

- system: wall-clock time in UTC
"""
