"""
Static analysis of Node-RED function code for debugging leftovers, plus
unit, flow and system quality scores.
"""

from .issue import ImpactLevel, Issue, IssueKind, SentinelVariant, Severity, SourcePosition, SourceRange
from .checker_base import NODE_RED, HostProfile
from .main_checker import LeftoverDetector, detect
from .quality_metrics import QualityMetrics, complexity_of, score_group, score_system, score_unit
from .records import GroupQualityRecord, SystemTrendRecord, UnitQualityRecord, UnitSample

__all__ = [
    'ImpactLevel',
    'Issue',
    'IssueKind',
    'SentinelVariant',
    'Severity',
    'SourcePosition',
    'SourceRange',
    'NODE_RED',
    'HostProfile',
    'LeftoverDetector',
    'detect',
    'QualityMetrics',
    'complexity_of',
    'score_group',
    'score_system',
    'score_unit',
    'GroupQualityRecord',
    'SystemTrendRecord',
    'UnitQualityRecord',
    'UnitSample',
]
