"""Baconverse: degrees of separation between actors through shared movies."""

__version__ = "0.1.0"
