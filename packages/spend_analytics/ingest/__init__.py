"""Data loading utilities (synthetic seeding)."""
