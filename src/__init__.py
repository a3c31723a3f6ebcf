"""Bag of Tricks: weighted character choice resolution."""
