"""Persistence adapters for the domain repositories."""
