"""Service layer: authentication, aggregates and exports."""
