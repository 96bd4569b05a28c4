"""
Model catalog cache service.

The package exposes a Flask app (see ``webapp``) that serves catalog
documents and model cards held in memory, plus the hydration routine
that fills the cache from the backing storage service at startup.
"""

__version__ = "0.1.0"
