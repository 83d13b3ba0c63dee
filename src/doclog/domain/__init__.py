"""Domain layer - log entries, filter predicates and the query engine."""
