"""Application layer: orchestration of auth, identity, and authorization."""
