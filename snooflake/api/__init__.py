"""The HTTP face of the generator."""
