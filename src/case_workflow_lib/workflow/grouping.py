"""Partition flat inbox rows into per-incident bulk targets."""

from typing import Dict, Iterable, List, Tuple

from case_workflow_lib.models.actions import SubcaseId
from case_workflow_lib.models.subcase import IncidentGroup, Subcase


def group_by_incident(rows: Iterable[Subcase]) -> List[IncidentGroup]:
    """Group rows by parent incident in a single stable pass.

    Rows without an incident (report-type cases) become singleton groups keyed
    by their own subcase id, so they are never merged with unrelated rows.
    Rows keep their relative input order within a group, and groups appear in
    first-appearance order of their key. Nothing is sorted.

    Example:
        >>> groups = group_by_incident([a1, a2, report])
        >>> [g.target_subcase_ids for g in groups]
        [[1, 2], [3]]
    """
    buckets: Dict[Tuple[str, SubcaseId], List[Subcase]] = {}

    for row in rows:
        if row.incident_id is not None:
            key = ("incident", row.incident_id)
        else:
            key = ("subcase", row.subcase_id)
        buckets.setdefault(key, []).append(row)

    return [
        IncidentGroup(incident_id=key[1] if key[0] == "incident" else None, rows=members)
        for key, members in buckets.items()
    ]
