"""Application layer: request schemas and service composition."""
