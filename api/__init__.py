"""HTTP surface of the breakeven report service."""
