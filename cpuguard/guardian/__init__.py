"""Monitor loop and the pure decision rules it applies each iteration."""
