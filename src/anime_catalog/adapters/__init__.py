"""Adapters for the remote catalog and the local cache."""
