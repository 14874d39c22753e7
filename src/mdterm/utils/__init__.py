"""Utility helpers for mdterm."""
