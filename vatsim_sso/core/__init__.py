"""Shared configuration, errors, logging and protocols."""
