"""
Resolution pipeline
Classifies inputs, resolves hostnames concurrently and tags provider addresses.
"""

from .cache import ResolutionCache
from .classifier import ClassifiedInput, InputKind, classify_input
from .formatter import ResolutionResult, format_invalid_url, format_result
from .pool import WorkerPool
from .processor import InputProcessor
from .resolver import Resolver, split_addresses, system_lookup
from .runner import run_resolution

__all__ = [
    'ClassifiedInput',
    'InputKind',
    'InputProcessor',
    'ResolutionCache',
    'ResolutionResult',
    'Resolver',
    'WorkerPool',
    'classify_input',
    'format_invalid_url',
    'format_result',
    'run_resolution',
    'split_addresses',
    'system_lookup'
]
