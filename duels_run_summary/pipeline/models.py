from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

PERSISTED = "persisted"
SKIPPED = "skipped"

NOT_TARGET_MODE = "not_target_mode"
MISSING_RUN_ID = "missing_run_id"
NO_LOOT = "no_loot"
AMBIGUOUS_FIRST_MATCH = "ambiguous_first_match"
CORRUPTED_RUN = "corrupted_run"
HERO_POWER_COUNT = "hero_power_count"
INVALID_RESULT = "invalid_result"
INVALID_DECKLIST = "invalid_decklist"


class RunEndEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    game_mode: Optional[str] = Field(default=None, alias="gameMode")
    current_duels_run_id: Optional[str] = Field(default=None, alias="currentDuelsRunId")
    run_id: Optional[str] = Field(default=None, alias="runId")
    player_card_id: Optional[str] = Field(default=None, alias="playerCardId")
    player_decklist: Optional[str] = Field(default=None, alias="playerDecklist")
    additional_result: Optional[str] = Field(default=None, alias="additionalResult")
    build_number: Optional[int] = Field(default=None, alias="buildNumber")
    result: Optional[str] = None
    creation_date: Optional[Union[str, int, float]] = Field(default=None, alias="creationDate")

    @property
    def resolved_run_id(self) -> Optional[str]:
        return self.current_duels_run_id or self.run_id


class DuelsRunSummary(BaseModel):
    game_mode: str
    run_start_date: Optional[str] = None
    run_end_date: Optional[str] = None
    build_number: Optional[int] = None
    rating: Optional[int] = None
    run_id: str
    player_class: Optional[str] = None
    decklist: str
    final_decklist: Optional[str] = None
    hero: Optional[str] = None
    hero_power: Optional[str] = None
    signature_treasure: Optional[str] = None
    treasures: str = ""
    passives: str = ""
    wins: int
    losses: int


class RunOutcome(BaseModel):
    status: str
    run_id: Optional[str] = None
    reason: Optional[str] = None
    row: Optional[DuelsRunSummary] = None

    @classmethod
    def skipped(cls, reason: str, run_id: Optional[str] = None) -> "RunOutcome":
        return cls(status=SKIPPED, run_id=run_id, reason=reason)

    @classmethod
    def persisted(cls, row: DuelsRunSummary) -> "RunOutcome":
        return cls(status=PERSISTED, run_id=row.run_id, row=row)
