"""Authoring, rehydration and instance resolution built on the calendar layer."""
