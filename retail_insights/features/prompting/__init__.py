from .services import PromptBuilder, build_prompt, serialize_rows

__all__ = ['PromptBuilder', 'build_prompt', 'serialize_rows']
