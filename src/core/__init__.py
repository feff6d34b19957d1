"""Core: domain models, configuration and the reconciliation services."""
