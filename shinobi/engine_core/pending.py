"""
Pending-Action Resolver - Response windows and judgements.

Played cards that can be answered open a ResponseWindow on the target.
While a window (or a judgement) is pending the phase machine is frozen;
only the responder or an ADVANCE step may move the game forward.

Window follow-ups when the responder declines:
- DAMAGE: the target takes the window's damage
- RESOLVE: the card's effect is applied
- JUDGEMENT: the window turns into a judgement on the same card
- START_DUEL: the window turns into the first duel round
- DUEL_ROUND: the declining side takes 1 damage
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .definitions import CardKind, Suit
from .deck import discard
from .effect_resolver import apply_damage, resolve_card_effect
from .state import FollowUp, Judgement, JudgementStep, LogKind, ResponseWindow

if TYPE_CHECKING:
    from .state import GameState, PlayerState, PlayingCard


JUDGEMENT_SUITS = [Suit.SPADE, Suit.HEART, Suit.CLUB, Suit.DIAMOND]
SUIT_SYMBOLS = {Suit.SPADE: "♠", Suit.HEART: "♥", Suit.CLUB: "♣", Suit.DIAMOND: "♦"}

# kind -> (demanded response, follow-up on decline)
WINDOWS: dict[CardKind, tuple[CardKind, FollowUp]] = {
    CardKind.ATTACK: (CardKind.DODGE, FollowUp.DAMAGE),
    CardKind.DUEL: (CardKind.NEGATE, FollowUp.START_DUEL),
    CardKind.DAMAGE_SCROLL: (CardKind.NEGATE, FollowUp.JUDGEMENT),
    CardKind.STEAL_SCROLL: (CardKind.NEGATE, FollowUp.RESOLVE),
    CardKind.DISCARD_SCROLL: (CardKind.NEGATE, FollowUp.RESOLVE),
    CardKind.SKIP_TURN: (CardKind.NEGATE, FollowUp.RESOLVE),
}


def opens_window(kind: CardKind) -> bool:
    return kind in WINDOWS or kind == CardKind.AOE


def open_window_for_card(
    state: GameState,
    source: PlayerState,
    target: PlayerState | None,
    card: PlayingCard,
) -> None:
    """Set state.pending for a card that was just played."""
    if card.kind == CardKind.AOE:
        state.log(f"{source.name} casts {card.name} on everyone!", LogKind.IMPORTANT)
        state.pending = Judgement(source_id=source.player_id, target_id=None, card=card)
        return

    demanded, follow_up = WINDOWS[card.kind]
    damage = 1
    if card.kind == CardKind.ATTACK:
        damage += source.character.passives.attack_damage_bonus
    state.log(f"{source.name} used {card.name} on {target.name}!")
    state.pending = ResponseWindow(
        source_id=source.player_id,
        target_id=target.player_id,
        card=card,
        demanded=demanded,
        on_no_response=follow_up,
        damage=damage,
    )


def accept(state: GameState, response: PlayingCard) -> None:
    """The responder plays the demanded card (already validated)."""
    window = state.pending
    responder = state.get_player(window.responder_id)
    responder.hand = responder.hand.remove(response)
    discard(state, [response])

    if window.on_no_response == FollowUp.DUEL_ROUND:
        state.log(f"{responder.name} answers with {response.name}!")
        state.pending = ResponseWindow(
            source_id=window.target_id,
            target_id=window.source_id,
            card=window.card,
            demanded=CardKind.ATTACK,
            on_no_response=FollowUp.DUEL_ROUND,
        )
        return

    verb = "dodged" if response.kind == CardKind.DODGE else "negated"
    state.log(f"{responder.name} {verb} {window.card.name} with {response.name}.")
    state.pending = None


def decline(state: GameState) -> None:
    """The responder passes; fire the window's follow-up."""
    window = state.pending
    source = state.get_player(window.source_id)
    target = state.get_player(window.target_id)
    follow_up = window.on_no_response

    if follow_up == FollowUp.DAMAGE:
        state.pending = None
        apply_damage(state, target, window.damage, source)
    elif follow_up == FollowUp.RESOLVE:
        state.pending = None
        resolve_card_effect(state, source, target, window.card)
    elif follow_up == FollowUp.JUDGEMENT:
        state.pending = Judgement(source_id=source.player_id, target_id=target.player_id, card=window.card)
    elif follow_up == FollowUp.START_DUEL:
        state.log(f"{source.name} and {target.name} begin a duel!", LogKind.IMPORTANT)
        state.pending = ResponseWindow(
            source_id=source.player_id,
            target_id=target.player_id,
            card=window.card,
            demanded=CardKind.ATTACK,
            on_no_response=FollowUp.DUEL_ROUND,
        )
    elif follow_up == FollowUp.DUEL_ROUND:
        state.pending = None
        state.log(f"{target.name} lost the duel.")
        apply_damage(state, target, 1, source)
    else:
        raise ValueError(f"Unknown follow-up: {follow_up}")


def advance_judgement(state: GameState) -> None:
    """
    Step a pending judgement forward.

    REVEAL announces it; DRAW flips a suit and rank from the game RNG
    (not from the piles), resolves the effect on success and clears
    the pending action either way.
    """
    judgement = state.pending
    source = state.get_player(judgement.source_id)

    if judgement.step == JudgementStep.REVEAL:
        whom = state.get_player(judgement.target_id).name if judgement.target_id else "everyone"
        state.log(f"Judgement for {judgement.card.name} on {whom}...", LogKind.JUDGEMENT)
        judgement.step = JudgementStep.DRAW
        return

    suit = state.rng.choice(JUDGEMENT_SUITS)
    rank = state.rng.randint(1, 13)
    rule = judgement.card.definition.judgement
    succeeded = rule.succeeds(suit) if rule else True
    outcome = "success" if succeeded else "failed"
    state.log(f"Judgement: {SUIT_SYMBOLS[suit]}{rank} ({outcome})", LogKind.JUDGEMENT)

    state.pending = None
    if succeeded:
        target = state.get_player(judgement.target_id) if judgement.target_id else None
        resolve_card_effect(state, source, target, judgement.card)
