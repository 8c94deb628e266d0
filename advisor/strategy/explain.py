"""Plain-language explanations for basic strategy actions."""

from advisor.cards import Card, Rank
from advisor.hand import Hand, HandType, classify_hand, evaluate_hand
from advisor.strategy.basic import Action

ARROW = "→"


def _upcard_text(upcard: Card) -> str:
    """Show an ace as 'A' and every other upcard by its value."""
    if upcard.is_ace:
        return "A"
    return str(upcard.value)


def _action_text(action: Action) -> str:
    if action == Action.DOUBLE:
        return "Double down"
    return action.label


def _pair_text(rank: Rank) -> str:
    if rank.is_ace:
        return "Aces"
    return f"{rank}s"


def explain(hand: Hand, dealer_upcard: Card, action: Action) -> str:
    """
    Explain an action for a hand against a dealer upcard.

    The text depends only on the three arguments, so the same decision
    always produces the same sentence.

    Examples:
        Hard 16 vs 10 → Surrender if allowed, else hit.
        Soft 18 vs 3 → Double down.
        Always split 8s.
    """
    hand_type = classify_hand(hand)
    total = evaluate_hand(hand).total
    dealer = _upcard_text(dealer_upcard)

    if hand_type == HandType.PAIR:
        rank = hand.cards[0].rank
        pair = _pair_text(rank)

        if action == Action.SPLIT:
            if rank == Rank.ACE:
                return "Always split Aces."
            if rank == Rank.EIGHT:
                return "Always split 8s."
            return f"Pair of {pair} vs {dealer} {ARROW} Split."
        if action == Action.SURRENDER:
            return f"Pair of 8s vs A {ARROW} Surrender if allowed, else split."
        return f"Pair of {pair} vs {dealer} {ARROW} Don't split, {_action_text(action).lower()}."

    prefix = f"{hand_type.value.title()} {total} vs {dealer} {ARROW}"

    if action == Action.SURRENDER:
        fallback = "stand" if total >= 17 else "hit"
        return f"{prefix} Surrender if allowed, else {fallback}."

    if action == Action.DOUBLE:
        always = " always" if hand_type == HandType.HARD and total == 11 else ""
        return f"{prefix} Double down{always}."

    return f"{prefix} {_action_text(action)}."
