"""Food photo nutrition analyzer."""

__version__ = "0.1.0"
