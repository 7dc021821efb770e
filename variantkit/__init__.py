"""Unit hashing, variant assignment, audience expressions, event models and HTTP transport for A/B testing clients."""

__version__ = "0.1.0"