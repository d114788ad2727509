"""
TopShot CLI Commands Package

Command modules for the TopShot transaction CLI.
"""

__all__ = ['config', 'generate', 'templates']
