"""Output layer: rendering bound object graphs for the CLI."""
