"""Core modules"""
from .config import ConfigManager
from .importer import open_input_file, iter_input_lines

__all__ = ['ConfigManager', 'open_input_file', 'iter_input_lines']
