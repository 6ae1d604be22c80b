"""Boundary adapters: REST API and terminal game."""
