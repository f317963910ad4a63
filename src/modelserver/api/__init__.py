"""HTTP API for the model server."""
