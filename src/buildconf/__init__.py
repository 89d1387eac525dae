"""Declarative project build configuration loader."""

from .clean import CleanAction, CleanResult
from .errors import CleanError, ConfigError, CycleError
from .evaluation import EvaluationGraph
from .layout import compute_build_dir
from .loader import ConfigLoader
from .models import BuildConfiguration, PluginRef, RepositorySource, SubprojectRef
from .schema import ProjectConfig

__version__ = "0.1.0"

__all__ = [
    'BuildConfiguration',
    'CleanAction',
    'CleanError',
    'CleanResult',
    'ConfigError',
    'ConfigLoader',
    'CycleError',
    'EvaluationGraph',
    'PluginRef',
    'ProjectConfig',
    'RepositorySource',
    'SubprojectRef',
    'compute_build_dir',
]
