"""Currencies, pairs, routes and trades."""
