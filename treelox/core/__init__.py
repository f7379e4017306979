"""Scanning, parsing and evaluation of treelox source."""
