"""CLI module for omni."""
