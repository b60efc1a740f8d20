import math
from typing import Annotated, Any, Dict, List, Optional, Tuple, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PrivateAttr,
    StrictBool,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)

DEFAULT_GAME_NUMBER = "unknown"
DEFAULT_CURRENCY = "USD"


def coerce_player_id(value: Any) -> str:
    """Normalize a player id given as a JSON integer or string to ``str``.

    Actions and pots are matched against the player list by plain string
    equality, so ``7`` and ``"7"`` have to end up as the same value here.
    """
    # bool is an int subclass; true/false is never an id
    if isinstance(value, bool):
        raise ValueError(f"expected a string or integer player ID, got {value!r}")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    raise ValueError(f"expected a string or integer player ID, got {value!r}")


def finite(value: float) -> float:
    if not math.isfinite(value):
        raise ValueError("expected a finite number")
    return value


PlayerId = Annotated[str, BeforeValidator(coerce_player_id)]
# ints beyond float range can come out of the JSON number path as inf
Amount = Annotated[float, Field(strict=True, allow_inf_nan=False), AfterValidator(finite)]
SmallCount = Annotated[int, Field(strict=True, ge=0, le=255)]


class OhhModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class BetLimit(OhhModel):
    bet_type: Optional[StrictStr] = None


class Player(OhhModel):
    id: PlayerId
    seat: SmallCount
    name: StrictStr
    starting_stack: Amount
    display: Optional[StrictStr] = None
    player_bounty: Optional[Amount] = None


class Action(OhhModel):
    action_number: StrictInt
    action: StrictStr
    player_id: Optional[PlayerId] = None
    amount: Optional[Amount] = None
    is_allin: Optional[StrictBool] = None
    cards: Optional[Tuple[StrictStr, ...]] = None


class Round(OhhModel):
    id: SmallCount
    street: StrictStr
    cards: Tuple[StrictStr, ...] = ()
    actions: Tuple[Action, ...]

    @field_validator("cards", mode="before")
    @classmethod
    def null_cards(cls, v):
        return () if v is None else v


class PlayerWin(OhhModel):
    player_id: PlayerId
    win_amount: Amount
    contributed_rake: Optional[Amount] = None


class Pot(OhhModel):
    number: SmallCount
    amount: Amount
    rake: Amount
    player_wins: Tuple[PlayerWin, ...]
    jackpot: Optional[Amount] = None


class HandRecord(OhhModel):
    spec_version: Optional[StrictStr] = None
    game_number: StrictStr = DEFAULT_GAME_NUMBER
    game_type: Optional[StrictStr] = None
    bet_limit: Optional[BetLimit] = None
    small_blind_amount: Amount
    big_blind_amount: Amount
    currency: Optional[StrictStr] = None
    start_date_utc: StrictStr
    table_name: StrictStr
    table_size: SmallCount
    table_handle: Optional[StrictStr] = None
    dealer_seat: SmallCount
    hero_player_id: Optional[PlayerId] = None
    site_name: Optional[StrictStr] = None
    network_name: Optional[StrictStr] = None
    internal_version: Optional[StrictStr] = None
    players: Tuple[Player, ...]
    rounds: Tuple[Round, ...]
    pots: Tuple[Pot, ...]

    _players_by_id: Dict[str, Player] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        # first listed player wins on duplicate ids
        for p in self.players:
            self._players_by_id.setdefault(p.id, p)

    @property
    def currency_code(self) -> str:
        return self.currency or DEFAULT_CURRENCY

    def player(self, pid: Optional[str]) -> Optional[Player]:
        if pid is None:
            return None
        return self._players_by_id.get(pid)


class OhhFile(OhhModel):
    """Wrapper document: ``{"ohh": {...}}``, ``{"ohh": [...]}`` or ``{"hands": [...]}``."""
    ohh: Optional[Union[HandRecord, List[HandRecord]]] = None
    hands: Optional[List[HandRecord]] = None

    @model_validator(mode="after")
    def has_hands(self):
        if self.ohh is None and self.hands is None:
            raise ValueError("missing field `ohh`")
        return self

    @property
    def records(self) -> List[HandRecord]:
        if self.ohh is None:
            return list(self.hands)
        if isinstance(self.ohh, list):
            return list(self.ohh)
        return [self.ohh]
