"""Color palette."""

# RGB tuples
BG = (18, 18, 24)
LANE_BG = (28, 28, 38)
LANE_BORDER = (60, 60, 76)
TARGET = (90, 90, 110)
TARGET_ACTIVE = (240, 240, 240)
NOTE = (66, 135, 245)
JUDGE_PERFECT = (80, 220, 100)
JUDGE_GOOD = (180, 220, 80)
JUDGE_MISS = (220, 60, 60)
HUD_TEXT = (220, 220, 220)
