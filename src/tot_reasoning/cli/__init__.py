"""Command line interface for the Tree of Thought engine."""
