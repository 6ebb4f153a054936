"""Shared utilities: cancellation and telemetry."""
