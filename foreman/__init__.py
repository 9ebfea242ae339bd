"""Client for the Foreman REST API."""
