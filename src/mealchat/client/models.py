from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """Email and password for an account."""

    model_config = ConfigDict(frozen=True)

    email: str = Field(description="Account email")
    password: str = Field(description="Account password")


class Preferences(BaseModel):
    """Meal-planning preferences stored on the backend."""

    dietary_restrictions: str = Field(
        default="",
        description="Comma-separated restrictions, e.g. 'vegetarian, gluten-free'"
    )
    max_cooking_time: int = Field(
        default=0,
        ge=0,
        description="Maximum cooking time in minutes (0 means no limit)"
    )

    def restriction_list(self) -> list[str]:
        """Split the free-text restrictions into individual entries."""
        return [part.strip() for part in self.dietary_restrictions.split(",") if part.strip()]
