"""Exceptions reported to interactive callers (the CLI)."""


class RingringError(Exception):
    """Base class for errors ringring surfaces to the user."""


class UnknownThemeError(RingringError):
    """Requested theme is not installed or has no manifest."""

    def __init__(self, theme: str):
        super().__init__(f"unknown theme '{theme}'")
        self.theme = theme


class UnknownCategoryError(RingringError):
    """Requested category does not exist in the theme's manifest."""

    def __init__(self, theme: str, category: str, available=None):
        message = f"theme '{theme}' has no category '{category}'"
        if available:
            message += f" (available: {', '.join(sorted(available))})"
        super().__init__(message)
        self.theme = theme
        self.category = category


class ThemeInstallError(RingringError):
    """A theme package could not be installed."""
