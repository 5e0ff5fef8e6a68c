from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RuleDirective(BaseModel):
    """One parsed `name[:value]` token of an attribute's rule string."""

    name: str = Field(..., description="The registered rule name")
    value: Optional[str] = Field(default=None, description="Raw argument string after the first colon")

    model_config = ConfigDict(frozen=True)

    @property
    def parameters(self) -> list[str]:
        if self.value is None:
            return []
        return self.value.split(',')

    def __str__(self) -> str:
        return self.name if self.value is None else f"{self.name}:{self.value}"
