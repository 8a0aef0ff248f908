"""Adyax web service: a validated REST surface over a node store."""
