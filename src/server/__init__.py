"""HTTP surface for jsonmaker."""
