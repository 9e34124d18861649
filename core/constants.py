"""
Shared constants.

This module has no dependencies on models or services to avoid circular imports.
"""

# Length of every generated program
PROGRAM_WEEKS = 12

# Rest between sets, in seconds
REST_SECONDS = 180
CORE_REST_SECONDS = 120

# Session length (minutes) -> exercises per day. Checked top-down.
SESSION_EXERCISE_TARGETS = (
    (90, 7),
    (60, 6),
    (45, 5),
)
MIN_SESSION_EXERCISES = 4
DEFAULT_SESSION_EXERCISES = 6

SUPPORTED_SESSION_LENGTHS = (30, 45, 60, 90)
DEFAULT_SESSION_LENGTH = 60

MIN_TRAINING_DAYS = 2
MAX_TRAINING_DAYS = 6
DEFAULT_TRAINING_DAYS = 3

# Maximum length for a single free-text profile entry (injuries, preferences)
MAX_PROFILE_TEXT_LENGTH = 100

# Maximum number of free-text entries allowed per list field
MAX_PROFILE_LIST_COUNT = 10

DEFAULT_PROGRAM_NAME = "12-week Hypertrophy Program"
PROGRAM_SOURCES = ["science-refs", "Jeff Nippard", "TNF", "Mike Israetel"]

# Citation strings forwarded to the LLM prompt
MAX_CITATION_LENGTH = 300
MAX_CITATIONS_COUNT = 20
