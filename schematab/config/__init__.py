from .loader import ConfigError, TableConfig, load_table_config

__all__ = [
    "ConfigError",
    "TableConfig",
    "load_table_config",
]
