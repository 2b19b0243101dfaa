"""Correspondence building, item matching and identifier rewriting."""
