"""Configuration package.

Note: settings are built in ``minicache.config.settings``; import from there
directly so importing this package stays free of environment reads.
"""

__all__: list[str] = []
