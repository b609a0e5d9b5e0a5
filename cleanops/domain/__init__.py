"""Domain layer: plain entities shared by every backend."""
