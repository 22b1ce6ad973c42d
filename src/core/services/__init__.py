"""Core services: resolution, retrieval, batch policy and output."""
