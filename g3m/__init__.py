"""G3M - invariant engine for weighted geometric mean market makers."""

from g3m.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from g3m.dynamic_param import DynamicParam
from g3m.strategies import G3MStrategy, NTokenG3MStrategy

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_ENGINE_CONFIG",
    "DynamicParam",
    "EngineConfig",
    "G3MStrategy",
    "NTokenG3MStrategy",
    "__version__",
]
