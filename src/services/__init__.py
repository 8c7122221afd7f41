"""Standalone services."""
