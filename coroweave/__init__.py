"""Coroutine primitives: tasks, generators, when_all, thread pools and synchronisation."""

__version__ = "0.1.0"