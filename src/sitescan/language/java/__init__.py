"""Java syntax trees, symbols, types and source positions."""
