"""Profile pipeline: client, rendering, screen and bridge."""
