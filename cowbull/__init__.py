"""Cows and Bulls - a daily number-guessing game.

Every day all players get the same secret 3-digit number with unique
digits, derived deterministically from the calendar date. Players guess
until they find it, guided by bulls (right digit, right place) and cows
(right digit, wrong place).
"""

__version__ = "0.1.0"
