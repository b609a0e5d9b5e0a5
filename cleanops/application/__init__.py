"""Application layer: reminder engine and inbox use cases."""
