"""Keyboard-first single-user task list."""
