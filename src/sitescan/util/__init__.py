"""Utilities shared by the sitescan packages."""
