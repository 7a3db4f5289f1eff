"""Domain layer: translation compiler, rules, feedback and mining."""
