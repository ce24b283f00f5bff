"""Adapters between the core decoding pipeline and the outside world."""
