# 规则引擎模块
from .card import (
    Card, Rank, Suit, OPENING_CARD, SPADE_TWO,
    create_deck, shuffle_and_deal, sort_cards,
)
from .hand_type import HandType, PlayedHand
from .hand_detector import detect_hand, classify
from .rules import RuleSet, RuleVariant, can_beat, category_order
from .errors import (
    PlayError, NotYourTurnError, NotInHandError, MustOpenWithStartingCardError,
    IllegalPlayError, InvalidShapeError, GameFinishedError,
)
