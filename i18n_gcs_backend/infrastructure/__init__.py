"""Infrastructure: remote store access."""
