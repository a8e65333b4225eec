"""Base classes for JobHook extensions."""

from jobhook.base.notifier import BaseNotifier

__all__ = ["BaseNotifier"]
