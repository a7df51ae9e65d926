"""Combo builder configuration.

Re-exports the settings dataclass from the patterns module and builds the
process-wide instance from the environment.
"""

from patterns.domain_config import ComboBuilderSettings

# Default configuration instance
settings = ComboBuilderSettings.from_env()
