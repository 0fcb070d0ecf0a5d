"""Logging estruturado e correlation id."""
