"""CardQuery - natural-language card search translation service."""
