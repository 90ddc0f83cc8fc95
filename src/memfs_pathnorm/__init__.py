"""Path-name equivalence engine for in-memory file systems."""

from .errors import PathNormError, ConfigurationError
from .profile import CanonicalForm, CaseFold, Normalization, NormalizationProfile
from .normalizer import PathNormalizer, CompiledPattern
from .config import ConfigLoader, NormalizationConfig, PathNormConfig
from .logging import get_logger, setup_logging, setup_logging_from_config
from .logging_config import LoggingConfig

__all__ = [
    'PathNormError',
    'ConfigurationError',
    'CanonicalForm',
    'CaseFold',
    'Normalization',
    'NormalizationProfile',
    'PathNormalizer',
    'CompiledPattern',
    'ConfigLoader',
    'NormalizationConfig',
    'PathNormConfig',
    'setup_logging',
    'setup_logging_from_config',
    'get_logger',
    'LoggingConfig',
]
