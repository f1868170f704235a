"""Constants and enumerations for agent performance metrics."""

from enum import StrEnum
from typing import Final


# Input Parsing
CANDIDATE_DELIMITERS: Final[tuple[str, ...]] = (",", "\t", "|", ";")
DEFAULT_DELIMITER: Final[str] = ","
DELIMITER_SAMPLE_LINES: Final[int] = 10
ABANDONED_SENTINEL: Final[str] = "YES"
NULL_AGENT: Final[str] = "null"
ALL_SELECTOR: Final[str] = "all"
TEXT_COLUMNS: Final[frozenset[str]] = frozenset(
    {"Queue", "Media Type", "Users - Interacted", "Date"}
)
MAX_EXACT_NUMBER: Final[int] = 2**53

# Unit Normalization
UNIT_SCALE_THRESHOLD: Final[int] = 10_000
UNIT_SCALE_DIVISOR: Final[int] = 1_000

# Time
SECONDS_PER_MINUTE: Final[int] = 60
SECONDS_PER_HOUR: Final[int] = 3_600
WORKDAY_HOURS: Final[int] = 8
WORKDAY_SECONDS: Final[int] = WORKDAY_HOURS * SECONDS_PER_HOUR

# Scoring Policy
NEUTRAL_EFFICIENCY: Final[int] = 100
UTILIZATION_CAP: Final[float] = 100.0
NEW_AGENT_MIN_HANDLED: Final[int] = 10
TIER_EFFICIENCY_WEIGHT: Final[float] = 0.4
TIER_PRODUCTIVITY_WEIGHT: Final[float] = 0.4
TIER_VOLUME_WEIGHT: Final[int] = 20
TIER_VOLUME_SATURATION: Final[int] = 100
GOLD_THRESHOLD: Final[int] = 85
SILVER_THRESHOLD: Final[int] = 70

# Highlight Lists
HIGHLIGHT_MIN_HANDLED: Final[int] = 10
TOP_PERFORMER_LIMIT: Final[int] = 6
COACHING_EFFICIENCY_THRESHOLD: Final[int] = 85
COACHING_LIMIT: Final[int] = 4

# Output
DEFAULT_REPORT_OUTPUT: Final[str] = "agent_metrics.json"
DEFAULT_AGENTS_CSV_OUTPUT: Final[str] = "agent_metrics.csv"
DEFAULT_DISPLAY_LIMIT: Final[int] = 20
JSON_INDENT: Final[int] = 2

# Empty Values
EMPTY_STRING: Final[str] = ""

# Numeric Constants
EXIT_CODE_ERROR: Final[int] = 1


class Column(StrEnum):
    """Input header names consumed by the ingestor."""

    QUEUE = "Queue"
    MEDIA_TYPE = "Media Type"
    ABANDONED = "Abandoned"
    TOTAL_HANDLE = "Total Handle"
    TOTAL_QUEUE = "Total Queue"
    AGENT = "Users - Interacted"
    DATE = "Date"


class PerformanceTier(StrEnum):
    """Coarse agent classification."""

    NEW = "new"
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"


class SortKey(StrEnum):
    """Ordering applied to the agent list."""

    INTERACTIONS = "interactions"
    HANDLE_TIME = "handle_time"
    EFFICIENCY = "efficiency"


class AgentCsvKey(StrEnum):
    """Column names of the agent CSV export."""

    AGENT = "agent"
    TIER = "performance_tier"
    TOTAL_INTERACTIONS = "total_interactions"
    HANDLED_INTERACTIONS = "handled_interactions"
    ABANDONED_WHILE_ASSIGNED = "abandoned_while_assigned"
    AVG_HANDLE_TIME = "avg_handle_time"
    EFFICIENCY_SCORE = "efficiency_score"
    PRODUCTIVITY_RATE = "productivity_rate"
    UTILIZATION_RATE = "utilization_rate"
    VERSATILITY_SCORE = "versatility_score"
    INTERACTIONS_PER_HOUR = "interactions_per_hour"


class ReportKey(StrEnum):
    """Top-level keys of the serialized metrics report."""

    AGENTS = "agents"
    SUMMARY = "summary"
    TEAM_AVG_HANDLE_TIME = "team_avg_handle_time"
    SELECTION = "selection"
    SORT_BY = "sort_by"
    TOP_PERFORMERS = "top_performers"
    COACHING_CANDIDATES = "coaching_candidates"


class LogMessage(StrEnum):
    """Log message templates."""

    LOADING_FILE = "Loading interactions from {}..."
    DETECTED_DELIMITER = "Detected delimiter {!r}"
    LOADED_RECORDS = "Loaded {} interactions with {} unique agents"
    DROPPED_ROWS = "Dropped {} rows missing Queue or Media Type"
    DROPPED_MALFORMED_LINES = "Dropped {} lines with unbalanced quotes"
    FILTERED_RECORDS = "Filter {} kept {} of {} interactions"
    SKIPPED_UNASSIGNED = "Skipped {} interactions without an agent"
    ANALYSIS_HEADER = "=== WORKFORCE SUMMARY ==="
    TOTAL_AGENTS = "Total agents: {}"
    AVG_INTERACTIONS = "Average interactions per agent: {}"
    AVG_HANDLE_TIME = "Team average handle time: {}"
    TIER_COUNTS = "Top performers (gold): {} | Needs coaching (bronze): {}"
    AVG_EFFICIENCY = "Average efficiency: {}"
    AVG_UTILIZATION = "Average utilization: {}%"
    SAVED_REPORT = "Saved metrics report to {}"
    SAVED_AGENTS_CSV = "Saved {} agents to {}"
    NO_AGENTS_TO_SAVE = "No agents to save to CSV"
    FILE_PROCESSING_FAILED = "Failed to process uploaded file: {}"
    ERROR_OCCURRED = "Error occurred: {}"


class CliHelp(StrEnum):
    """CLI help messages."""

    APP = "Call-center agent performance metrics"
    INPUT_FILE = "Delimited interaction export (comma, tab, pipe or semicolon)."
    QUEUE = "Only include interactions from this queue."
    MEDIA_TYPE = "Only include interactions of this media type."
    AGENT = "Only include interactions handled by this agent."
    SORT_BY = "Agent ordering: interactions, handle_time or efficiency."
    LIMIT = "Number of agents to display."
    JSON_OUTPUT = "Write the full metrics report to this JSON file."
    CSV_OUTPUT = "Write one row per agent to this CSV file."
    OUTPUT_DIR = "Directory where output files are written."
