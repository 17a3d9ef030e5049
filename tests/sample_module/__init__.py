"""Module contributing an entity to the application graph."""
