"""PantryLog HTTP API."""
