"""Boundary to the CosmWasm chain: queries, executes and address checks."""
