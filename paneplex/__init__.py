"""Status bar, tab bar, file browser pane, input dispatch, terminal access, session discovery and asset installation for a terminal workspace."""

__version__ = "0.1.0"