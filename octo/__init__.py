"""Create and promote Octopus Deploy releases from build pipelines."""

__version__ = "0.1.0"
