"""Colony facilities."""
