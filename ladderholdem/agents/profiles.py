"""
CPU opponent roster.

Each opponent is a fixed personality: five 0-100 tendencies that drive the
decision model, plus the identity and career flavour shown on the ladder
screen. Tiers run 1 (easiest) to 5; an opponent is playable once its tier
is unlocked.
"""

from dataclasses import dataclass, asdict
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class CPUProfile:
    """
    Personality of a CPU opponent.

    Attributes:
        aggression: Tendency to bet and raise (0-100)
        bluff_frequency: Chance of inflating a weak hand (0-100)
        call_frequency: Willingness to continue facing a bet (0-100)
        raise_frequency: Score a hand must beat before raising (0-100)
        hand_strength_threshold: Raw strength it always continues with (0-100)
    """
    id: str
    name: str
    tier: int
    aggression: int
    bluff_frequency: int
    call_frequency: int
    raise_frequency: int
    hand_strength_threshold: int
    portrait: str = ""
    bio: str = ""
    difficulty_stars: int = 1
    career_tokens_won: int = 0
    career_win_rate: float = 0.0
    biggest_pot_won: int = 0
    streak_record: int = 0

    def __post_init__(self):
        for attr in ("aggression", "bluff_frequency", "call_frequency",
                     "raise_frequency", "hand_strength_threshold"):
            value = getattr(self, attr)
            if not 0 <= value <= 100:
                raise ValueError(f"{self.id}: {attr} must be within 0-100, got {value}")
        if self.tier < 1:
            raise ValueError(f"{self.id}: tier must be positive")

    @property
    def is_cautious(self) -> bool:
        """Cautious opponents tighten up on the turn and river."""
        return self.call_frequency < 50

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


THE_NORM = CPUProfile(
    id="theNorm", name="The Norm", tier=1,
    aggression=10, bluff_frequency=5, call_frequency=90,
    raise_frequency=5, hand_strength_threshold=15,
    portrait="😐",
    bio="The friendly neighborhood player. Plays any two cards, calls too much, rarely raises.",
    difficulty_stars=1,
    career_tokens_won=500, career_win_rate=0.25, biggest_pot_won=150, streak_record=3,
)

ANY_ACE_NICK = CPUProfile(
    id="anyAceNick", name="Any Ace Nick", tier=2,
    aggression=25, bluff_frequency=10, call_frequency=75,
    raise_frequency=20, hand_strength_threshold=30,
    portrait="😎",
    bio="Aggressive with any ace. Overvalues Ax hands, calls too light.",
    difficulty_stars=2,
    career_tokens_won=1200, career_win_rate=0.35, biggest_pot_won=280, streak_record=5,
)

RED_THE_RIOT = CPUProfile(
    id="redTheRiot", name="Red the Riot", tier=3,
    aggression=50, bluff_frequency=15, call_frequency=40,
    raise_frequency=45, hand_strength_threshold=50,
    portrait="😠",
    bio="Tight-aggressive. Folds weak hands, bets strong ones, punishes loose play.",
    difficulty_stars=3,
    career_tokens_won=2800, career_win_rate=0.48, biggest_pot_won=520, streak_record=8,
)

CRAZY_HORSE = CPUProfile(
    id="crazyHorse", name="Crazy Horse", tier=4,
    aggression=85, bluff_frequency=35, call_frequency=30,
    raise_frequency=80, hand_strength_threshold=40,
    portrait="🤪",
    bio="Hyper-aggressive. Shoves light, bluffs often, forces tough decisions.",
    difficulty_stars=4,
    career_tokens_won=5500, career_win_rate=0.52, biggest_pot_won=890, streak_record=6,
)

MR_MARK = CPUProfile(
    id="mrMark", name="Mr. Mark", tier=5,
    aggression=70, bluff_frequency=25, call_frequency=45,
    raise_frequency=65, hand_strength_threshold=60,
    portrait="🧐",
    bio="The master strategist. Balanced, mixes bluffs, adapts to patterns.",
    difficulty_stars=5,
    career_tokens_won=12000, career_win_rate=0.62, biggest_pot_won=1500, streak_record=12,
)

ROSTER: Tuple[CPUProfile, ...] = (THE_NORM, ANY_ACE_NICK, RED_THE_RIOT, CRAZY_HORSE, MR_MARK)

PROFILES: Dict[str, CPUProfile] = {p.id: p for p in ROSTER}

DEFAULT_OPPONENT_ID = THE_NORM.id
MAX_TIER = max(p.tier for p in ROSTER)


def get_profile(opponent_id: str) -> CPUProfile:
    """
    Look up an opponent by id.

    Raises:
        ValueError: If the id is not on the roster
    """
    try:
        return PROFILES[opponent_id]
    except KeyError:
        raise ValueError(f"Unknown opponent: {opponent_id}") from None


def profile_for_tier(tier: int) -> CPUProfile:
    """The opponent sitting at a given tier."""
    for profile in ROSTER:
        if profile.tier == tier:
            return profile
    raise ValueError(f"No opponent at tier {tier}")


def unlocked_profiles(unlocked_tiers: int) -> List[CPUProfile]:
    """Opponents available with ``unlocked_tiers`` tiers open."""
    return [p for p in ROSTER if p.tier <= unlocked_tiers]
