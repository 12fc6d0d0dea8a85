"""
Game State - The complete state of a clash at a point in time.

Design principles:
- Immutable-friendly: the reducer clones, mutates the clone, returns it
- Self-contained: the seeded RNG lives in the state, so a snapshot
  fully determines what the next command does
- Observable: every state-affecting step appends a tagged log entry
"""

from __future__ import annotations
from dataclasses import dataclass, field
from copy import deepcopy
from enum import Enum
import random

from .definitions import CardDefinition, CardKind, CharacterDefinition, Suit
from .rules import GameRules


class Phase(Enum):
    """Turn phases of the active player, plus the terminal state."""
    START = "start"
    DRAW = "draw"
    PLAY = "play"
    DISCARD = "discard"
    END = "end"
    GAME_OVER = "game_over"


class LogKind(Enum):
    INFO = "info"
    DAMAGE = "damage"
    HEAL = "heal"
    IMPORTANT = "important"
    JUDGEMENT = "judgement"
    SKILL = "skill"


@dataclass(frozen=True)
class LogEntry:
    sequence: int
    text: str
    kind: LogKind = LogKind.INFO


@dataclass
class PlayingCard:
    """
    A card instance in the game.

    Note: suit and rank are assigned at deck generation and only
    matter for suit-based checks; the definition says what it does.
    """
    definition: CardDefinition
    instance_id: str
    suit: Suit
    rank: int

    @property
    def card_id(self) -> str:
        return self.definition.id

    @property
    def kind(self) -> CardKind:
        return self.definition.kind

    @property
    def name(self) -> str:
        return self.definition.name

    def __hash__(self):
        return hash(self.instance_id)

    def __eq__(self, other):
        if not isinstance(other, PlayingCard):
            return False
        return self.instance_id == other.instance_id


@dataclass
class Zone:
    """
    An ordered collection of cards: a hand, the draw pile or the discard pile.
    """
    name: str
    cards: list[PlayingCard] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.cards)

    @property
    def is_empty(self) -> bool:
        return len(self.cards) == 0

    def add(self, card: PlayingCard) -> Zone:
        """Return new zone with card added."""
        return Zone(name=self.name, cards=self.cards + [card])

    def add_many(self, cards: list[PlayingCard]) -> Zone:
        return Zone(name=self.name, cards=self.cards + list(cards))

    def remove(self, card: PlayingCard) -> Zone:
        """Return new zone with card removed."""
        new_cards = [c for c in self.cards if c.instance_id != card.instance_id]
        return Zone(name=self.name, cards=new_cards)

    def find(self, instance_id: str) -> PlayingCard | None:
        for card in self.cards:
            if card.instance_id == instance_id:
                return card
        return None

    def first_of_kind(self, kind: CardKind) -> PlayingCard | None:
        for card in self.cards:
            if card.kind == kind:
                return card
        return None

    def of_kind(self, *kinds: CardKind) -> list[PlayingCard]:
        return [c for c in self.cards if c.kind in kinds]


class EquipSlot(Enum):
    WEAPON = "weapon"
    ARMOR = "armor"
    OFFENSE_MOUNT = "offense_mount"
    DEFENSE_MOUNT = "defense_mount"


SLOT_FOR_KIND: dict[CardKind, EquipSlot] = {
    CardKind.EQUIP_WEAPON: EquipSlot.WEAPON,
    CardKind.EQUIP_ARMOR: EquipSlot.ARMOR,
    CardKind.EQUIP_OFFENSE_MOUNT: EquipSlot.OFFENSE_MOUNT,
    CardKind.EQUIP_DEFENSE_MOUNT: EquipSlot.DEFENSE_MOUNT,
}


@dataclass
class Equipment:
    """At most one card per slot."""
    weapon: PlayingCard | None = None
    armor: PlayingCard | None = None
    offense_mount: PlayingCard | None = None
    defense_mount: PlayingCard | None = None

    def get(self, slot: EquipSlot) -> PlayingCard | None:
        return getattr(self, slot.value)

    def set(self, slot: EquipSlot, card: PlayingCard | None) -> PlayingCard | None:
        """Put card in slot, returning the previous occupant."""
        previous = self.get(slot)
        setattr(self, slot.value, card)
        return previous

    def cards(self) -> list[PlayingCard]:
        return [c for c in (self.weapon, self.armor, self.offense_mount, self.defense_mount) if c]

    def remove(self, instance_id: str) -> PlayingCard | None:
        for slot in EquipSlot:
            card = self.get(slot)
            if card and card.instance_id == instance_id:
                self.set(slot, None)
                return card
        return None

    def clear(self) -> list[PlayingCard]:
        removed = self.cards()
        for slot in EquipSlot:
            self.set(slot, None)
        return removed

    @property
    def is_empty(self) -> bool:
        return not self.cards()


@dataclass
class PlayerFlags:
    ultimate_cooldown: int = 0
    ultimate_used: bool = False
    revive_used: bool = False


@dataclass
class PlayerState:
    """
    State for a single seat.

    hp == 0 means eliminated: the seat is skipped for turn order,
    distance and targeting from then on.
    """
    player_id: str
    is_ai: bool
    character: CharacterDefinition
    hp: int
    max_hp: int
    hand: Zone = field(default_factory=lambda: Zone(name="hand"))
    equipment: Equipment = field(default_factory=Equipment)
    attacks_played: int = 0
    skipped_turn: bool = False
    flags: PlayerFlags = field(default_factory=PlayerFlags)

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    @property
    def is_human(self) -> bool:
        return not self.is_ai

    @property
    def name(self) -> str:
        return self.character.name

    @property
    def is_wounded(self) -> bool:
        return self.hp < self.max_hp

    def has_cards(self) -> bool:
        """Anything a scroll could take: hand or equipment."""
        return not self.hand.is_empty or not self.equipment.is_empty

    def all_cards(self) -> list[PlayingCard]:
        return self.hand.cards + self.equipment.cards()


@dataclass
class ResponseWindow:
    """
    A pause demanding `demanded` from the target before an effect resolves.

    on_no_response says what happens when the target declines.
    """
    source_id: str
    target_id: str
    card: PlayingCard
    demanded: CardKind
    on_no_response: FollowUp
    damage: int = 1

    @property
    def responder_id(self) -> str:
        return self.target_id


class FollowUp(Enum):
    DAMAGE = "damage"
    RESOLVE = "resolve"
    JUDGEMENT = "judgement"
    START_DUEL = "start_duel"
    DUEL_ROUND = "duel_round"


class JudgementStep(Enum):
    REVEAL = "reveal"
    DRAW = "draw"


@dataclass
class Judgement:
    """A random suit/rank reveal gating the card's effect. target_id None means all others."""
    source_id: str
    target_id: str | None
    card: PlayingCard
    step: JudgementStep = JudgementStep.REVEAL


PendingAction = ResponseWindow | Judgement


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state the engine operates on.
    All state changes go through the reducer.
    """
    game_id: str
    rules: GameRules = field(default_factory=GameRules)

    phase: Phase = Phase.START
    turn_number: int = 1
    current_player_idx: int = 0

    # Fixed seating: index 0 is the human
    players: list[PlayerState] = field(default_factory=list)

    draw_pile: Zone = field(default_factory=lambda: Zone(name="draw_pile"))
    discard_pile: Zone = field(default_factory=lambda: Zone(name="discard_pile"))

    pending: PendingAction | None = None
    discard_required: int = 0
    winner_id: str | None = None

    logs: list[LogEntry] = field(default_factory=list)
    log_sequence: int = 0

    random_seed: int = 0
    rng: random.Random = field(default_factory=random.Random)

    # Every card instance id that exists in this game
    universe: frozenset[str] = field(default_factory=frozenset)

    @property
    def current_player(self) -> PlayerState:
        """Get the current player."""
        return self.players[self.current_player_idx]

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def is_over(self) -> bool:
        return self.phase == Phase.GAME_OVER

    @property
    def human(self) -> PlayerState:
        return self.players[0]

    def get_player(self, player_id: str) -> PlayerState | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def seat_of(self, player_id: str) -> int:
        for idx, p in enumerate(self.players):
            if p.player_id == player_id:
                return idx
        raise KeyError(player_id)

    def alive_players(self) -> list[PlayerState]:
        return [p for p in self.players if p.is_alive]

    @property
    def acting_player_id(self) -> str | None:
        """
        Who must act next.

        None means the next step is automatic (phase transitions,
        judgement reveals) or the game is over.
        """
        if self.is_over:
            return None
        if isinstance(self.pending, ResponseWindow):
            return self.pending.responder_id
        if isinstance(self.pending, Judgement):
            return None
        if self.phase in (Phase.PLAY, Phase.DISCARD):
            return self.current_player.player_id
        return None

    def log(self, text: str, kind: LogKind = LogKind.INFO) -> None:
        """Append to the capped narrative log (working copies only)."""
        self.log_sequence += 1
        self.logs.append(LogEntry(sequence=self.log_sequence, text=text, kind=kind))
        overflow = len(self.logs) - self.rules.log_limit
        if overflow > 0:
            del self.logs[:overflow]

    def all_card_ids(self) -> list[str]:
        """Instance ids across piles, hands and equipment (duplicates kept)."""
        ids = [c.instance_id for c in self.draw_pile.cards]
        ids.extend(c.instance_id for c in self.discard_pile.cards)
        for p in self.players:
            ids.extend(c.instance_id for c in p.hand.cards)
            ids.extend(c.instance_id for c in p.equipment.cards())
        return ids

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)
