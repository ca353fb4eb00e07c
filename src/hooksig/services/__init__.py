"""Service layer — the registry, its producers, the resolver, and catalog queries."""
