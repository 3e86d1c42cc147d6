"""
Application-wide constants for the matching engine.

This module contains the scoring dimensions, default weights, neutral
scores and behavioral increments. Modify these values to tune behavior
without changing code logic.
"""

from enum import Enum
from typing import Final


# =============================================================================
# Application Constants
# =============================================================================

APP_DISPLAY_NAME: Final[str] = "Talent Match Recommendation Engine"


# =============================================================================
# Enums
# =============================================================================


class Dimension(str, Enum):
    """
    Every dimension a weight can be tracked for.

    Only the dimensions in SCORED_DIMENSIONS have a scorer; the rest are
    reserved and accumulate behavioral weight without affecting the score.
    """

    AGE = "age"
    LOCATION = "location"
    BODY_TYPE = "body_type"
    CUP_SIZE = "cup_size"
    GUARANTEE = "guarantee"
    SERVICE = "service"
    TATTOO = "tattoo"
    HAIR_COLOR = "hair_color"
    APPEARANCE = "appearance"


class ListingStatus(str, Enum):
    """Publication status of a store listing."""

    DRAFT = "draft"
    PUBLISHED = "published"


class ServiceType(str, Enum):
    """Service category offered by a store."""

    DERIHERU = "deriheru"
    HOTEHERU = "hoteheru"
    HAKOHERU = "hakoheru"
    ESTHE = "esthe"
    ONAKURA = "onakura"
    MSEIKAN = "mseikan"


class Prefecture(str, Enum):
    """Japanese prefectures, valued by their stored names."""

    HOKKAIDO = "北海道"
    AOMORI = "青森県"
    AKITA = "秋田県"
    IWATE = "岩手県"
    YAMAGATA = "山形県"
    FUKUSHIMA = "福島県"
    MIYAGI = "宮城県"
    GUNMA = "群馬県"
    TOCHIGI = "栃木県"
    IBARAKI = "茨城県"
    TOKYO = "東京都"
    KANAGAWA = "神奈川県"
    CHIBA = "千葉県"
    SAITAMA = "埼玉県"
    AICHI = "愛知県"
    SHIZUOKA = "静岡県"
    MIE = "三重県"
    GIFU = "岐阜県"
    ISHIKAWA = "石川県"
    FUKUI = "福井県"
    TOYAMA = "富山県"
    NIIGATA = "新潟県"
    NAGANO = "長野県"
    YAMANASHI = "山梨県"
    OSAKA = "大阪府"
    HYOGO = "兵庫県"
    KYOTO = "京都府"
    SHIGA = "滋賀県"
    NARA = "奈良県"
    WAKAYAMA = "和歌山県"
    HIROSHIMA = "広島県"
    OKAYAMA = "岡山県"
    YAMAGUCHI = "山口県"
    TOTTORI = "鳥取県"
    SHIMANE = "島根県"
    KAGAWA = "香川県"
    TOKUSHIMA = "徳島県"
    KOCHI = "高知県"
    EHIME = "愛媛県"
    FUKUOKA = "福岡県"
    NAGASAKI = "長崎県"
    OITA = "大分県"
    SAGA = "佐賀県"
    KUMAMOTO = "熊本県"
    MIYAZAKI = "宮崎県"
    KAGOSHIMA = "鹿児島県"
    OKINAWA = "沖縄県"


# =============================================================================
# Scoring Constants
# =============================================================================

SCORED_DIMENSIONS: Final[tuple[Dimension, ...]] = (
    Dimension.AGE,
    Dimension.LOCATION,
    Dimension.BODY_TYPE,
    Dimension.CUP_SIZE,
    Dimension.GUARANTEE,
    Dimension.SERVICE,
)

RESERVED_DIMENSIONS: Final[tuple[Dimension, ...]] = (
    Dimension.TATTOO,
    Dimension.HAIR_COLOR,
    Dimension.APPEARANCE,
)

DEFAULT_DIMENSION_WEIGHTS: Final[dict[Dimension, float]] = {
    Dimension.AGE: 25.0,
    Dimension.LOCATION: 20.0,
    Dimension.BODY_TYPE: 15.0,
    Dimension.CUP_SIZE: 15.0,
    Dimension.GUARANTEE: 15.0,
    Dimension.SERVICE: 10.0,
    Dimension.TATTOO: 3.0,
    Dimension.HAIR_COLOR: 3.0,
    Dimension.APPEARANCE: 4.0,
}

# Named presets selectable per request
WEIGHT_PRESETS: Final[dict[str, dict[Dimension, float]]] = {
    "location": {
        Dimension.AGE: 15.0,
        Dimension.LOCATION: 35.0,
        Dimension.BODY_TYPE: 10.0,
        Dimension.CUP_SIZE: 10.0,
        Dimension.GUARANTEE: 15.0,
        Dimension.SERVICE: 10.0,
        Dimension.TATTOO: 2.0,
        Dimension.HAIR_COLOR: 2.0,
        Dimension.APPEARANCE: 1.0,
    },
    "guarantee": {
        Dimension.AGE: 15.0,
        Dimension.LOCATION: 15.0,
        Dimension.BODY_TYPE: 10.0,
        Dimension.CUP_SIZE: 10.0,
        Dimension.GUARANTEE: 35.0,
        Dimension.SERVICE: 10.0,
        Dimension.TATTOO: 2.0,
        Dimension.HAIR_COLOR: 2.0,
        Dimension.APPEARANCE: 1.0,
    },
}

# Decay windows (distance at which a score reaches 0)
AGE_DECAY_YEARS: Final[float] = 10.0
SPEC_DECAY_POINTS: Final[float] = 20.0

# Neutral values
NO_CONSTRAINT_SCORE: Final[float] = 1.0
INVALID_SPEC_RANGE_SCORE: Final[float] = 0.5
CUP_SIZE_NEUTRAL_SCORE: Final[float] = 0.5
GUARANTEE_NEUTRAL_SCORE: Final[float] = 0.5
GUARANTEE_FALLBACK_SCORE: Final[float] = 0.3

LOCATION_SCORES: Final[dict[str, float]] = {
    "exact": 1.0,
    "preferred": 0.8,
    "other": 0.2,
}

# Body categories from slimmest to fullest, keyed by minimum spec
BODY_TYPE_LADDER: Final[tuple[tuple[str, int | None], ...]] = (
    ("スリム", 110),
    ("やや細め", 105),
    ("普通", 100),
    ("やや太め", 95),
    ("グラマー", 90),
    ("ぽっちゃり", None),
)
BODY_TYPE_STEP_PENALTY: Final[float] = 0.15
BODY_TYPE_MIN_SCORE: Final[float] = 0.3

# Reason thresholds (strictly greater than, except SERVICE)
REASON_THRESHOLD: Final[float] = 0.8
STRONG_REASON_THRESHOLD: Final[float] = 0.9

# Benefits worth surfacing as a match reason, at most MAX_BENEFIT_REASONS
KEY_BENEFITS: Final[tuple[str, ...]] = (
    "日払い可",
    "週払い可",
    "寮完備",
    "未経験歓迎",
    "講習あり",
    "託児所あり",
    "送迎あり",
    "個室待機",
    "自由出勤",
    "ノルマなし",
)
MAX_BENEFIT_REASONS: Final[int] = 2


# =============================================================================
# Behavioral Adjustment Constants
# =============================================================================

HIGH_GUARANTEE_THRESHOLD: Final[int] = 25000
MAX_WEIGHT_DELTA: Final[float] = 5.0

# Tattoo acceptance levels, strictest first
TATTOO_ACCEPTANCE_LEVELS: Final[tuple[str, ...]] = ("なし", "目立たない", "目立つ", "要相談")
STRICTEST_TATTOO_ACCEPTANCE: Final[str] = TATTOO_ACCEPTANCE_LEVELS[0]

APPLIED_INCREMENTS: Final[dict[Dimension, float]] = {
    Dimension.LOCATION: 0.5,
    Dimension.SERVICE: 0.5,
    Dimension.GUARANTEE: 0.5,  # only above HIGH_GUARANTEE_THRESHOLD
    Dimension.APPEARANCE: 0.3,  # only with preferred look types
    Dimension.HAIR_COLOR: 0.3,  # only with preferred hair colors
    Dimension.TATTOO: 0.3,  # only at the strictest acceptance
}

KEPT_INCREMENTS: Final[dict[Dimension, float]] = {
    Dimension.LOCATION: 0.3,
    Dimension.GUARANTEE: 0.3,  # only above HIGH_GUARANTEE_THRESHOLD
    Dimension.SERVICE: 0.2,
    Dimension.BODY_TYPE: 0.2,  # only with preferred body types
}

VIEWED_INCREMENTS: Final[dict[Dimension, float]] = {
    Dimension.LOCATION: 0.1,
    Dimension.GUARANTEE: 0.1,
    Dimension.SERVICE: 0.1,
}
