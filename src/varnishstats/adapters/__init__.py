"""Adapters connecting the core to storage, logging and collection."""
