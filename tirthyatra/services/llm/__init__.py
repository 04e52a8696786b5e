"""Language-model text generation for narrative trip guides.

Public API:
    - ChatTextGenerator: wraps a LangChain chat model as a text generator
    - create_text_generator: factory returning the configured generator or ``None``
    - build_guide_prompt / fallback_guide: prompt and template helpers
"""
from tirthyatra.services.llm.generator import (
    ChatTextGenerator,
    build_guide_prompt,
    create_text_generator,
    fallback_guide,
)

__all__ = [
    "ChatTextGenerator",
    "create_text_generator",
    "build_guide_prompt",
    "fallback_guide",
]
