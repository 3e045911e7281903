"""Adapters for the backing store and transport ports."""
