"""Fracas: a turn-based territory conquest game engine."""
