"""Ports (Protocols) implemented by infrastructure."""

from task_manager.application.interfaces.repositories import ITaskRepository

__all__ = ["ITaskRepository"]
