"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/report_service.py
Renders duplicate groups and run summaries as human text or JSON.
Groups are expected to already be in presentation order (see core.sorter.Sorter).
"""
import json
from typing import Dict, List, Optional

from ducky.core.models import ActionStats, DuplicateGroup
from ducky.utils.convert_utils import ConvertUtils


class ReportService:
    @staticmethod
    def format_human(groups: List[DuplicateGroup], reclaimable: int) -> str:
        lines = []
        for group in groups:
            lines.append(f"== {len(group.members)} duplicates of {ConvertUtils.bytes_to_human(group.size)} ==")
            for path in group.members:
                lines.append(f"  {path}")
        if groups:
            lines.append("")
            lines.append(ReportService.format_found_line(groups, reclaimable))
        return "\n".join(lines)

    @staticmethod
    def format_found_line(groups: List[DuplicateGroup], reclaimable: int) -> str:
        return f"Found {len(groups)} duplicate groups; reclaimable: {ConvertUtils.bytes_to_human(reclaimable)}"

    @staticmethod
    def format_groups_json(groups: List[DuplicateGroup]) -> str:
        return json.dumps([group.to_dict() for group in groups], indent=2)

    @staticmethod
    def build_summary(
            groups: List[DuplicateGroup],
            reclaimable: int,
            action_stats: ActionStats,
            timings: Optional[Dict[str, int]] = None
    ) -> Dict[str, object]:
        """Machine-readable run summary. `timings` stays None unless requested."""
        return {
            "groups": len(groups),
            "files": sum(len(group.members) for group in groups),
            "reclaimable": reclaimable,
            "errors": action_stats.errors,
            "timings": timings,
        }

    @staticmethod
    def format_summary_json(summary: Dict[str, object]) -> str:
        return json.dumps(summary, indent=2)

    @staticmethod
    def format_timings(timings: Dict[str, int]) -> str:
        return "timings: " + " ".join(f"{key}={value}" for key, value in timings.items())
