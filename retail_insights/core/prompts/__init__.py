"""
Core Prompts Package
Shared heading vocabulary and system instructions
"""

from .headings import SectionHeading, SECTION_HEADINGS, SECTION_KEYS
from .system_prompts import SystemPrompts

__all__ = [
    'SectionHeading',
    'SECTION_HEADINGS',
    'SECTION_KEYS',
    'SystemPrompts'
]
