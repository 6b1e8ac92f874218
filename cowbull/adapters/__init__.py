"""External adapters for the Cows and Bulls game.

This package contains all external dependencies (SQLite, PostgreSQL,
the terminal) and provides implementations of the core port interfaces.

Adapter Organization:

- clock/: Wall-clock time for the core
- store/: Game record persistence (SQLite, PostgreSQL)
- cli/: Interactive command-line play and text rendering
"""
