"""Runnable demonstrations of tickstream usage patterns."""
