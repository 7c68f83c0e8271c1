"""Shared configuration, logging, errors and domain types."""
