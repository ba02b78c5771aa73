"""Walkers over typed Java trees."""
