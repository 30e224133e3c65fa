"""Shared test helpers: stub loaders and a fake clock."""
