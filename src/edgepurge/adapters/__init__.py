"""Framework adapters for edgepurge."""
