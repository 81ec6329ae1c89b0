from .constructor import construct_prompt

__all__ = ["construct_prompt"]
