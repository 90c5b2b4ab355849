"""Get Everything Done - focus-session task timer with escalating session lengths."""

__version__ = "0.1.0"
