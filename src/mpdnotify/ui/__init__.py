"""Desktop presentation of notifications."""
