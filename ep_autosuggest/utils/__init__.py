"""Utility helpers package for text sanitizing, IDs, and I/O."""
