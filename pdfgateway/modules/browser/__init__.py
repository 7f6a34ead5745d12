"""Browser module - headless Chromium lifecycle."""

from .session import LAUNCH_ARGS, BrowserSessionManager, get_browser_manager

__all__ = ["BrowserSessionManager", "LAUNCH_ARGS", "get_browser_manager"]
