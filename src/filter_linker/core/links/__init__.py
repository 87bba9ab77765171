from filter_linker.core.links.models import (
    Candidate,
    FilterGroup,
    LinkKind,
    LinkRequest,
    LinkResult,
    LinkStatus,
    LinkSummary,
)
from filter_linker.core.links.discovery import resolve_candidates
from filter_linker.core.links.materializer import (
    check_preconditions,
    create_link,
    materialize,
)

__all__ = [
    "Candidate",
    "FilterGroup",
    "LinkKind",
    "LinkRequest",
    "LinkResult",
    "LinkStatus",
    "LinkSummary",
    "resolve_candidates",
    "check_preconditions",
    "create_link",
    "materialize",
]
