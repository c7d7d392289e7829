"""Streamlit-free scheduling rules: status, conflicts, moves, workflows and view filters."""
from .clock import Clock, FixedClock, get_clock, set_clock
from .conflicts import build_conflict_warnings, dedupe_conflicts, overlap_range
from .moves import DropGuard, MoveAction, MoveDecision, MoveReconciler, PointerTracker, resolve_date_at
from .mutations import MutationState, PendingMutation
from .permissions import Capabilities, PermissionTable, permission_table
from .status import derive_status, is_event_done
from .tentative import TentativeMeta, build_tentative_description, parse_tentative_description

__all__ = [
    'Clock',
    'FixedClock',
    'get_clock',
    'set_clock',
    'build_conflict_warnings',
    'dedupe_conflicts',
    'overlap_range',
    'DropGuard',
    'MoveAction',
    'MoveDecision',
    'MoveReconciler',
    'PointerTracker',
    'resolve_date_at',
    'MutationState',
    'PendingMutation',
    'Capabilities',
    'PermissionTable',
    'permission_table',
    'derive_status',
    'is_event_done',
    'TentativeMeta',
    'build_tentative_description',
    'parse_tentative_description',
]
