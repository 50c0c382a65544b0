"""
NEAT Run Package

Configuration and the driver loop for NEAT runs.

Modules:
    config: Config class (INI configuration)
    trial:  Trial abstract base class (import from 'neatlite.run.trial')
"""

from neatlite.run.config import Config

__all__ = ['Config']
