"""Fixed week layout, day coefficients and drill catalogue."""

DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
COEFFS = [0.69, 0.702, 0.714, 0.916, 0.912, 0.618]
PERCENTS = ["69%", "70.2%", "71.4%", "91.6%", "91.2%", "61.8%"]

# Share of the weekly total spread over an average day, before the day coefficient.
DAILY_SHARE = 0.69

DEFAULT_FACT = 8
DEFAULT_TARGET_SETS = "4"
DEFAULT_REST = "90s"
UNCATEGORIZED = "Uncategorized"
UNTITLED_DRILL = "Untitled Drill"

DRILL_CATEGORIES = [
    "Upper Body",
    "Lower Body",
    "Core",
    "Speed",
    "Agility",
    "Endurance",
    "Flexibility",
    "Technical",
]

DRILL_PRESETS = [
    "[UPPER BODY] Standard Push-Up",
    "[UPPER BODY] Bench Press",
    "[LOWER BODY] Air Squat",
    "[LOWER BODY] Barbell Back Squat",
    "[CORE] Plank",
    "[CORE] Russian Twist",
    "[SPEED] Suicides (On-Court)",
    "[AGILITY] Defense Shuffle",
    "[TEKNIK] Righty - Lefty Drill",
    "[TEKNIK] Dribbling Around Cones",
]
