"""Shared configuration, logging and repositories."""
