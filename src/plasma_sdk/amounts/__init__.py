"""Exact rational amounts: fractions, percents, prices and currency amounts."""
