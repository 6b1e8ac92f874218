"""Command-line interface adapters.

Provides CLI commands for playing the daily game:
- new: Start today's game (or a past day's)
- guess: Submit a three-digit guess
- history: Show guesses so far
- stats: Report recorded results for the player
"""
