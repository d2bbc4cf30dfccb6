"""stylegen package root."""

from stylegen.exceptions import DiagnosticKind, GenerationError
from stylegen.generate import GenerateConfig, GenerationEngine

__all__ = [
    "__version__",
    "DiagnosticKind",
    "GenerateConfig",
    "GenerationEngine",
    "GenerationError",
]

__version__ = "0.1.0"
