"""Headless session host for Snake Arcade."""
