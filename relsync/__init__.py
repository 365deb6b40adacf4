"""relsync: converge a GitHub release, its tag and its assets to a declared state."""

__version__ = "0.3.0"
