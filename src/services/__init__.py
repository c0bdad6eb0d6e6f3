"""
Service Layer - Business logic layer between front ends and the core.

Services orchestrate operations on the image model, implement business
rules, and provide a clean interface for routers and the script runner.
"""

from .editor_service import EditorService
from .script_runner import ScriptRunner

__all__ = ["EditorService", "ScriptRunner"]
