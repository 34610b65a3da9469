"""Statistics engine: pure functions over a match snapshot."""

from engine.achievements import evaluate_achievements, load_rules
from engine.aggregator import aggregate_all, aggregate_stats, compute_streak, newest_first
from engine.bundle import build_player_bundle
from engine.leaderboard import build_leaderboard
from engine.relationships import analyze_relationships
from engine.rivalries import build_rivalries, by_encounters, head_to_head
from engine.shame import build_shame_report, validate_shame_rules
from engine.snapshot import MatchSnapshot, build_snapshot

__all__ = [
    "MatchSnapshot",
    "build_snapshot",
    "aggregate_stats",
    "aggregate_all",
    "compute_streak",
    "newest_first",
    "build_leaderboard",
    "analyze_relationships",
    "build_rivalries",
    "by_encounters",
    "head_to_head",
    "load_rules",
    "evaluate_achievements",
    "build_player_bundle",
    "build_shame_report",
    "validate_shame_rules",
]
