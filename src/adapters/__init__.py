"""Adapters: filesystem readers and output exporters."""
