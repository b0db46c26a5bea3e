"""Bespoke Beaver: recommend places from an X persona."""

__version__ = "0.1.0"
