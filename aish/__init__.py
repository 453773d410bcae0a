"""A shell whose output is simulated by an OpenAI-compatible chat model."""

from .config import SessionConfig, load_config
from .openai_client import CompletionClient, CompletionError
from .shell import AiShell

__version__ = "0.1.0"

__all__ = ["AiShell", "CompletionClient", "CompletionError", "SessionConfig", "load_config"]
