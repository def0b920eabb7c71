"""teardownctl - mount-aware node teardown for cluster runtimes."""

__version__ = "0.1.0"
