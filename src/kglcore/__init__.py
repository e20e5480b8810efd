"""kglcore — canonical vocabulary registry and staged validation gateway."""

__version__ = "0.1.0"
