"""Delivery mechanisms exposed to clients."""
