from .app import SwatchGoblinApp, run

__all__ = ['SwatchGoblinApp', 'run']
