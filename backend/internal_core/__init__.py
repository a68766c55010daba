from .config import ContractsConfig, load_config

__all__ = ["ContractsConfig", "load_config"]
