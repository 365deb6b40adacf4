"""GitHub REST adapter: transport, payload models and the repository API."""
