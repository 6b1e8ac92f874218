"""Test suite for the Cows and Bulls game.

Organized into three categories:

1. core/: Unit tests for core game logic
   - No third-party dependencies besides the test tools
   - Uses in-memory fakes for ports

2. adapters/: Integration tests for adapter implementations
   - SQLite against a temporary file, PostgreSQL with a mocked pool

3. fakes/: Port implementations for testing
   - In-memory implementations of ClockPort, TargetNumberProviderPort
     and GameRecordSinkPort
"""
