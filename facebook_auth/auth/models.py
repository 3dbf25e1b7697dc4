from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class InternalUserData(BaseModel):
    """A site user as stored locally. `id` stays None until the row exists."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    facebook_id: str = Field(alias="facebookId")
    email: Optional[str] = None
    full_name: Optional[str] = Field(default=None, alias="fullName")

    @classmethod
    def from_row(cls, row: dict) -> "InternalUserData":
        return cls(
            id=row["id"],
            facebook_id=row["facebook_user_id"],
            email=row["email"],
            full_name=row["full_name"],
        )

    def to_public(self) -> dict:
        """camelCase dict for JSON responses."""
        return self.model_dump(by_alias=True)


class FacebookProfile(BaseModel):
    """The subset of the Graph API /me response we rely on.

    All three fields must be present and non-null: a profile with
    `"email": null` (no verified address) is rejected like a missing one.
    """

    id: str
    name: str
    email: str

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        # Graph API ids are numeric strings, but accept bare numbers too
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    def to_internal(self) -> InternalUserData:
        return InternalUserData(
            facebook_id=self.id,
            full_name=self.name,
            email=self.email,
        )


class LoginRequest(BaseModel):
    facebookAccessToken: str
