"""PromptRelay - conversation sessions and LLM / speech-to-text relay backend."""

__version__ = "1.0.0"
