"""Per-session clarification dialog on top of the intent layer."""
