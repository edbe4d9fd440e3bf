"""Shared utilities: JSON logging, event schemas and the in-process event bus."""
