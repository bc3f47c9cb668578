"""
Production models - video projects and their builds.

Status lifecycle: draft -> queued -> building -> review -> approved -> published
(or failed).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .wire import expect_list, expect_object, opt_str


PRODUCTION_STATUSES = ["draft", "queued", "building", "review", "approved", "published", "failed"]


@dataclass
class Production:
    """A production as returned by GET /productions/{id}."""
    id: str
    name: str = ""
    topic: str = ""
    status: str = ""
    category: Optional[str] = None
    spec: Optional[Dict[str, Any]] = None      # free-form build spec document
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def has_spec(self) -> bool:
        return self.spec is not None

    @classmethod
    def from_dict(cls, data: Any) -> "Production":
        data = expect_object(data, "production")
        spec = data.get("spec")
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name") or "",
            topic=data.get("topic") or "",
            status=data.get("status") or "",
            category=opt_str(data, "category"),
            spec=spec if isinstance(spec, dict) else None,
            created_at=opt_str(data, "createdAt"),
            updated_at=opt_str(data, "updatedAt"),
        )


@dataclass
class ProductionList:
    productions: List[Production] = field(default_factory=list)
    next_cursor: Optional[str] = None
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "ProductionList":
        data = expect_object(data, "productions list")
        return cls(
            productions=[Production.from_dict(p) for p in expect_list(data, "productions", "productions list")],
            next_cursor=opt_str(data, "nextCursor"),
            has_more=bool(data.get("hasMore", False)),
        )


@dataclass
class BuildStarted:
    """Response to POST /productions/{id}/build."""
    id: str
    status: str = ""
    build_id: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "BuildStarted":
        data = expect_object(data or {}, "build")
        return cls(
            id=str(data.get("id", "")),
            status=data.get("status") or "",
            build_id=opt_str(data, "buildId"),
            message=opt_str(data, "message"),
        )


@dataclass
class BuildStatus:
    """Response to GET /productions/{id}/build."""
    id: str
    status: str = ""
    build_id: Optional[str] = None
    build_log_url: Optional[str] = None
    build_finished_at: Optional[str] = None
    output_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "BuildStatus":
        data = expect_object(data, "build status")
        return cls(
            id=str(data.get("id", "")),
            status=data.get("status") or "",
            build_id=opt_str(data, "buildId"),
            build_log_url=opt_str(data, "buildLogUrl"),
            build_finished_at=opt_str(data, "buildFinishedAt"),
            output_url=opt_str(data, "outputUrl"),
        )
