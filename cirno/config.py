"""
Cirno Configuration

This module provides configuration settings for the interpreter,
the verifier and logging.
"""

import logging
from dataclasses import dataclass
from typing import Optional


@dataclass
class InterpreterConfig:
    """Configuration for the evaluator. max_depth=None means no nesting limit."""
    max_depth: Optional[int] = None
    flush_on_print: bool = False


@dataclass
class VerifierConfig:
    """Configuration for expression verification. None disables a limit, matching the interpreter."""
    max_depth: Optional[int] = None
    max_nodes: Optional[int] = None


@dataclass
class CirnoConfig:
    """Main configuration for Cirno."""
    interpreter: InterpreterConfig = None
    verifier: VerifierConfig = None
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.interpreter is None:
            self.interpreter = InterpreterConfig()
        if self.verifier is None:
            self.verifier = VerifierConfig()


# Global configuration instance
_config: Optional[CirnoConfig] = None


def get_config() -> CirnoConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = CirnoConfig()
    return _config


def set_config(config: CirnoConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def setup_logging(level: str = "WARNING") -> None:
    """Setup logging for Cirno."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


# Setup default logging
setup_logging(get_config().log_level)
