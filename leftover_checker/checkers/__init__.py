"""
Checkers package for debugging-leftover rules.
"""

from .return_checker import TopLevelReturnChecker
from .output_call_checker import DebugOutputChecker
from .sentinel_checker import SentinelValueChecker
from .unused_checker import UnusedDeclarationChecker
from .whitespace_checker import BlankRunChecker
from .comment_checker import CommentedOutCodeChecker, TodoCommentChecker

__all__ = [
    'TopLevelReturnChecker',
    'DebugOutputChecker',
    'SentinelValueChecker',
    'UnusedDeclarationChecker',
    'BlankRunChecker',
    'CommentedOutCodeChecker',
    'TodoCommentChecker',
]
