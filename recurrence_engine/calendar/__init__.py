"""Rule grammar, date arithmetic and occurrence generation."""
