"""
Services package for the hypertrophy program API.

Contains the program synthesis pipeline:
- Base week templates by training frequency
- Equipment substitution
- Session shape enforcement (core placement, fill and trim)
- 12-week periodization with deloads
- Working-weight suggestions from the big three maxes
- Orchestration of rule-engine and LLM generation
"""

from services.equipment import equipment_mode, normalized_key, substitute
from services.periodization import PeriodizationScheduler, WeekParameters
from services.program_generator import ProgramGenerationError, ProgramGenerator, can_view_week
from services.session_constraints import SessionLengthError, SessionShapeEnforcer
from services.template_library import TemplateLibrary, resolve_frequency
from services.weight_prescription import suggested_range, suggested_weight

__all__ = [
    # Equipment
    "equipment_mode",
    "normalized_key",
    "substitute",
    # Periodization
    "PeriodizationScheduler",
    "WeekParameters",
    # Program Generation
    "ProgramGenerationError",
    "ProgramGenerator",
    "can_view_week",
    # Session Shape
    "SessionLengthError",
    "SessionShapeEnforcer",
    # Templates
    "TemplateLibrary",
    "resolve_frequency",
    # Weights
    "suggested_range",
    "suggested_weight",
]
