"""Attribute permission and per-attribute authorization for request payloads."""
