"""Analytics domain services."""
