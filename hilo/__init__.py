"""
Hilo - Number-guessing game engine

A deterministic engine for the higher/lower guessing game over 1..100,
played by a human against the engine or by the engine against itself.
Provides:
- Range narrowing with contradiction detection
- Binary-search guessing
- Session state machine and self-play traces
- An HTTP API and CLI on top
"""

__version__ = "0.1.0"
