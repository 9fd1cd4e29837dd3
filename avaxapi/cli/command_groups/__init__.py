"""Command group registrations."""
