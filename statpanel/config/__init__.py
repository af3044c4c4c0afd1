from .runtime_config import RuntimeConfig, get_runtime_config  # re-export
