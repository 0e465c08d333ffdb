"""Command line interface for metascore."""
