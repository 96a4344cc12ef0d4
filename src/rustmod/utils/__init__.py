"""Utility helpers for rustmod."""
