"""Role resolution: data models, the resolver and the resolution service."""
