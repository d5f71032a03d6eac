"""Shared entity base classes."""
