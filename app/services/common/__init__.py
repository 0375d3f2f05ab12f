"""Shared pipeline machinery."""
