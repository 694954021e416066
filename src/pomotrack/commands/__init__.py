"""Command modules for the pomotrack CLI."""
