"""Run configuration for the symbolic calculus front end."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .expression_tree.core.domain import NumericDomain, get_domain
from .logging_system import LogLevel

_TRUE_STRINGS = {'1', 'true', 'yes', 'on'}
_FALSE_STRINGS = {'0', 'false', 'no', 'off', ''}


def _parse_bool(name: str, text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in _FALSE_STRINGS:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {text!r}")


@dataclass
class EngineConfig:
    """Settings shared by the command line and library callers"""
    domain: str = 'real'
    case_insensitive: bool = False
    log_level: LogLevel = LogLevel.MINIMAL
    log_to_file: bool = False
    log_file_path: Optional[str] = None

    def __post_init__(self):
        """Validate fields after initialization"""
        self.domain = get_domain(self.domain).name
        if isinstance(self.log_level, str):
            self.log_level = LogLevel.from_name(self.log_level)
        if self.log_file_path is not None and not self.log_to_file:
            self.log_to_file = True

    def resolve_domain(self) -> NumericDomain:
        return get_domain(self.domain)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'EngineConfig':
        """Build a config from SYMCALC_* environment variables"""
        environ = os.environ if environ is None else environ
        kwargs = {}
        if 'SYMCALC_DOMAIN' in environ:
            kwargs['domain'] = environ['SYMCALC_DOMAIN']
        if 'SYMCALC_IGNORE_CASE' in environ:
            kwargs['case_insensitive'] = _parse_bool('SYMCALC_IGNORE_CASE', environ['SYMCALC_IGNORE_CASE'])
        if 'SYMCALC_LOG_LEVEL' in environ:
            kwargs['log_level'] = LogLevel.from_name(environ['SYMCALC_LOG_LEVEL'])
        if environ.get('SYMCALC_LOG_FILE'):
            kwargs['log_file_path'] = environ['SYMCALC_LOG_FILE']
        return cls(**kwargs)
