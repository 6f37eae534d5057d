"""Users app."""
