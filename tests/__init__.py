"""Tests for the CLES engine."""
