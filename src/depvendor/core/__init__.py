"""Core engine: configuration, logging, fetch collaborator and vendoring."""
