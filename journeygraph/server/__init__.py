"""HTTP surface for journey graph analysis."""
