"""Unit tests for core game logic."""
