"""Workout domain services."""
