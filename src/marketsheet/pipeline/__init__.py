"""Classification and row-explosion pipeline."""
