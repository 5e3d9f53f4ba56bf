"""Core data models and payload utilities."""
