from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

ALL_GENRES = "All Genres"
ALL = "All"


class RecommendationRequest(BaseModel):
    genre: str | None = ALL_GENRES
    actor: str | None = ALL
    director: str | None = ALL
    min_rating: float | None = Field(None, ge=1.0, le=10.0)
    year_range: tuple[int, int] | None = None

    @field_validator("genre", "actor", "director")
    @classmethod
    def _strip(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @model_validator(mode="after")
    def _ordered_years(self) -> RecommendationRequest:
        if self.year_range is not None and self.year_range[0] > self.year_range[1]:
            raise ValueError(f"Invalid year range: {self.year_range[0]} > {self.year_range[1]}")
        return self

    @property
    def genre_filter(self) -> str | None:
        return None if self.genre in (None, ALL_GENRES, ALL) else self.genre

    @property
    def actor_filter(self) -> str | None:
        return None if self.actor in (None, ALL) else self.actor

    @property
    def director_filter(self) -> str | None:
        return None if self.director in (None, ALL) else self.director


class RankedMovie(BaseModel):
    rank: int = Field(..., ge=1)
    title: str
    release_year: int | None = None
    genre: str | None = None
    director: str | None = None
    cast: list[str] = Field(default_factory=list)
    imdb_rating: float
    votes: int
    sentiment: float
    cluster: int = Field(..., ge=0)
    final_score: float


class EvaluationResult(BaseModel):
    precision: float = Field(..., ge=0.0, le=1.0)
    accuracy: float = Field(..., ge=0.0, le=1.0)
    n_recommended: int = 0
    n_relevant: int = 0
    n_hits: int = 0

    def format(self) -> str:
        return f"Precision: {round(self.precision, 3)} | Accuracy: {round(self.accuracy, 3)}"
