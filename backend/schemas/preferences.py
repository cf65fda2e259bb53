"""
Pydantic schema for user taste preferences.

Preferences arrive from the onboarding flow as a domain -> free text mapping.
They are parsed into this record on every endpoint that accepts them: text is
stripped, the onboarding form's `movies` key is read as `film`, other unknown
keys are dropped, and non-string values are rejected.
"""

from typing import Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class TastePreferences(BaseModel):
    """What the user currently enjoys, per cultural domain."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    film: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("film", "movies"),
        max_length=2000,
        description="Film preferences",
        examples=["Marvel movies, romantic comedies"]
    )
    music: Optional[str] = Field(
        None,
        max_length=2000,
        description="Music preferences",
        examples=["Pop, Taylor Swift"]
    )
    books: Optional[str] = Field(
        None,
        max_length=2000,
        description="Reading preferences",
        examples=["Thrillers, self-help"]
    )
    food: Optional[str] = Field(
        None,
        max_length=2000,
        description="Food preferences",
        examples=["Pizza, burgers, mild curries"]
    )
    fashion: Optional[str] = Field(
        None,
        max_length=2000,
        description="Style preferences",
        examples=["Jeans and t-shirts"]
    )

    def as_dict(self) -> Dict[str, str]:
        """Non-empty domain entries only."""
        return {
            domain: text
            for domain, text in self.model_dump(exclude_none=True).items()
            if text
        }
