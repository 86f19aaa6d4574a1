from typing import Any, Dict, Generic, Optional, TypeVar
from pydantic import BaseModel, Field
from datetime import datetime, timezone

T = TypeVar("T")

class ApiResponse(BaseModel, Generic[T]):
    """Success envelope shared by the JSON endpoints."""

    success: bool = True
    data: Optional[T] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with JSON-serializable values."""
        return self.model_dump(mode="json")

    @classmethod
    def ok(cls, data: T, **metadata: Any) -> "ApiResponse[T]":
        # None-valued metadata keys are dropped so optional sections stay absent
        return cls(
            success=True,
            data=data,
            metadata={k: v for k, v in metadata.items() if v is not None},
        )
