"""
Pydantic schemas for generation requests and results.
"""

from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from codecrafter.frameworks import FrameworkEntry


class GenerationRequest(BaseModel):
    """A single request to generate a component."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    user_description: str = Field(..., description="What the user wants built, trimmed")
    framework: FrameworkEntry = Field(..., description="Target framework entry from the catalog")

    @field_validator("user_description")
    @classmethod
    def _strip_and_require(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("user_description must not be empty")
        return value


AttemptStatus = Literal["pending", "success", "transient_failure", "fatal_failure"]


class GenerationAttempt(BaseModel):
    """
    One call to the generation service.

    Created pending at call start and resolved exactly once.
    """
    attempt_number: int = Field(..., ge=0, description="Zero-based attempt index")
    status: AttemptStatus = Field("pending", description="Outcome of the attempt")
    raw_text: Optional[str] = Field(None, description="Model output on success")
    reason: Optional[str] = Field(None, description="Failure reason")

    def resolve(self, status: AttemptStatus, raw_text: Optional[str] = None,
                reason: Optional[str] = None) -> None:
        """Record the attempt's outcome."""
        if self.status != "pending":
            raise RuntimeError(f"Attempt {self.attempt_number} already resolved as {self.status}")
        self.status = status
        self.raw_text = raw_text
        self.reason = reason


ErrorKind = Literal["overloaded", "unavailable", "other"]


class GenerationError(BaseModel):
    """Caller-visible reason a generation failed."""
    model_config = ConfigDict(frozen=True)

    kind: ErrorKind = Field(..., description="Failure category")
    message: str = Field("", description="Detail for logs and generic failures")

    @property
    def is_overload(self) -> bool:
        """Whether the failure came from service overload (immediate or after retries)."""
        return self.kind in ("overloaded", "unavailable")


class GenerationResult(BaseModel):
    """Final result of a generation request: raw text or an error, never both."""
    model_config = ConfigDict(frozen=True)

    raw_text: Optional[str] = None
    error: Optional[GenerationError] = None
    attempts: int = Field(0, ge=0, description="Number of service calls made")

    @property
    def ok(self) -> bool:
        return self.raw_text is not None

    @classmethod
    def success(cls, raw_text: str, attempts: int) -> "GenerationResult":
        return cls(raw_text=raw_text, attempts=attempts)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str, attempts: int) -> "GenerationResult":
        return cls(error=GenerationError(kind=kind, message=message), attempts=attempts)
