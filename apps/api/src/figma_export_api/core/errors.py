from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar


@dataclass
class APIError(Exception):
    status_code: int
    code: str
    message: str
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        return self.message


class ConversionError(APIError):
    pass


class InputShapeError(ConversionError):
    def __init__(self, message: str = "Unrecognized design document shape", details: dict[str, Any] | None = None) -> None:
        super().__init__(status_code=400, code="input_shape", message=message, details=details)


class UnsupportedFormatError(ConversionError):
    def __init__(self, format_name: str, supported: tuple[str, ...]) -> None:
        super().__init__(
            status_code=400,
            code="unsupported_format",
            message=f"Unsupported format: {format_name}",
            details={"format": format_name, "supported": list(supported)},
        )


class EmptyDesignError(ConversionError):
    def __init__(self, message: str = "No visual elements found in design", details: dict[str, Any] | None = None) -> None:
        super().__init__(status_code=422, code="empty_design", message=message, details=details)


class ArchiveIOError(ConversionError):
    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(status_code=500, code="archive_io", message=message, details=details)


class FigmaError(APIError):
    pass


class FigmaNotConfiguredError(FigmaError):
    def __init__(self) -> None:
        super().__init__(
            status_code=400,
            code="figma_not_configured",
            message="Figma access not configured",
            details={"hint": "Set FIGMA_ACCESS_TOKEN on the API service."},
        )


class FigmaFetchError(FigmaError):
    pass


# Diagnostics are recorded next to a successful result; they are never raised.


@dataclass(frozen=True)
class DepthExceededWarning:
    code: ClassVar[str] = "depth_exceeded"
    node_id: str
    depth: int
    max_depth: int
    truncated_children: int = 0

    @property
    def message(self) -> str:
        return f"Node {self.node_id} exceeds max depth {self.max_depth}; {self.truncated_children} children truncated"

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "node_id": self.node_id,
            "depth": self.depth,
            "max_depth": self.max_depth,
            "truncated_children": self.truncated_children,
        }


@dataclass(frozen=True)
class LowYieldWarning:
    code: ClassVar[str] = "low_yield"
    primary_count: int
    threshold: int
    fallback_count: int = 0
    fallback_ids: tuple[str, ...] = field(default_factory=tuple)

    @property
    def message(self) -> str:
        return (
            f"Primary pass found {self.primary_count} elements (threshold {self.threshold}); "
            f"fallback pass added {self.fallback_count}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "primary_count": self.primary_count,
            "threshold": self.threshold,
            "fallback_count": self.fallback_count,
        }


Diagnostic = DepthExceededWarning | LowYieldWarning
