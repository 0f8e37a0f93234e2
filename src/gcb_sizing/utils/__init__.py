"""Utility modules for GCB sizing studies"""

from .project_store import ProjectStore, SavedProject
from .assessment import (
    EngineeringAssessor,
    build_assessment_prompt,
    gemini_text_generator,
    ASSESSMENT_UNAVAILABLE,
)

__all__ = [
    "ProjectStore",
    "SavedProject",
    "EngineeringAssessor",
    "build_assessment_prompt",
    "gemini_text_generator",
    "ASSESSMENT_UNAVAILABLE",
]
