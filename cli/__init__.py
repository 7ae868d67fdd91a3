"""Terminal client for polling the weather monitoring service."""
