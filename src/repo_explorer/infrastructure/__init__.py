"""Infrastructure: path sandbox, traversal engine, presentation helpers and agent tool surface."""
