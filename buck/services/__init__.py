"""Audit engine: registry, runner, formatter and run orchestration."""
