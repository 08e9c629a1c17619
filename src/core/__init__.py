# core/__init__.py

from core.base_tool import BaseTool
from core.hooks import HookEvent, TestHookRegistry

__all__ = [
    "BaseTool",
    "HookEvent",
    "TestHookRegistry",
]
