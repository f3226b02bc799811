from .base_llm import BaseLLM

__all__ = ["BaseLLM"]
