from pydantic import BaseModel, Field, field_validator

from src.domain.entities import ShowFrequency

DEFAULT_FREQUENCY_THRESHOLDS: dict[ShowFrequency, int] = {
    "every": 1,
    "every-2": 2,
    "every-3": 3,
    "every-5": 5,
}


class ProjectRules(BaseModel):
    slug: str = "manhwa-reader"
    rules_version: str = "1"

class EntitlementRules(BaseModel):
    honor_premium_release_date: bool = False
    enforce_premium_expiry: bool = False

class AdsRules(BaseModel):
    frequency_thresholds: dict[ShowFrequency, int] = Field(
        default_factory=lambda: dict(DEFAULT_FREQUENCY_THRESHOLDS)
    )
    tracker_key: str = "manhwa_app_ad_tracker"

    @field_validator("frequency_thresholds")
    @classmethod
    def _all_frequencies_positive(
        cls, value: dict[ShowFrequency, int]
    ) -> dict[ShowFrequency, int]:
        missing = set(DEFAULT_FREQUENCY_THRESHOLDS) - set(value)
        if missing:
            raise ValueError(f"missing frequency thresholds: {', '.join(sorted(missing))}")
        for frequency, threshold in value.items():
            if threshold < 1:
                raise ValueError(f"threshold for '{frequency}' must be >= 1")
        return value

class PremiumRules(BaseModel):
    duration_days: int = Field(default=30, ge=1)

class StorageRules(BaseModel):
    db_path: str = "data/manhwa.db"
    comics_key: str = "manhwa_app_comics"
    chapters_key: str = "manhwa_app_chapters"
    ads_key: str = "manhwa_app_ads"
    auth_key: str = "manhwa_auth"
    bookmarks_key: str = "manhwa_bookmarks"

class Rules(BaseModel):
    project: ProjectRules = Field(default_factory=ProjectRules)
    entitlement: EntitlementRules = Field(default_factory=EntitlementRules)
    ads: AdsRules = Field(default_factory=AdsRules)
    premium: PremiumRules = Field(default_factory=PremiumRules)
    storage: StorageRules = Field(default_factory=StorageRules)
