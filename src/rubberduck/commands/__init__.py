"""CLI command bodies for rubberduck."""
