"""Command-line interface for hartcomm."""
