"""Local-network REST gateway for commanding a single robot device."""

__version__ = "0.1.0"
