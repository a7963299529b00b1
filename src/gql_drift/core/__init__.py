"""Schema-to-registry-to-query pipeline."""
