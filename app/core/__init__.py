"""Core application modules: exceptions, logging and domain events."""
