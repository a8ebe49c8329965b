"""Command implementations for the Trellis CLI."""
