"""
Bots module - Pluggable behavior for the engine's hider.

Provides:
- SecretSelectionStrategy: Interface for picking a secret
- UniformSecretStrategy: Plain random draw
- ProbeAvoidingSecretStrategy: Avoids early binary-search probes
"""

from .secret_selection import (
    SecretSelectionStrategy,
    UniformSecretStrategy,
    ProbeAvoidingSecretStrategy,
    SECRET_STRATEGIES,
    get_secret_strategy,
)

__all__ = [
    "SecretSelectionStrategy",
    "UniformSecretStrategy",
    "ProbeAvoidingSecretStrategy",
    "SECRET_STRATEGIES",
    "get_secret_strategy",
]
