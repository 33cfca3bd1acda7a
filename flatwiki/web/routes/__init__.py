"""Flatwiki route tables."""
