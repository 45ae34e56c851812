"""Fixed vocabularies and named defaults shared across the coach."""

MEAL_TIMES: tuple[str, ...] = ("breakfast", "lunch", "dinner", "snack")

DIETARY_TYPES: tuple[str, ...] = ("veg", "non-veg", "eggetarian")

CUISINES: tuple[str, ...] = (
    "North Indian",
    "South Indian",
    "Bengali",
    "Gujarati",
    "Maharashtrian",
    "Malayali",
    "Andhra",
    "Odia",
    "Rajasthani",
    "Bihari",
    "North-Eastern",
    "Kashmiri",
    "Snacks",
)

# Checked in order after the vocabulary itself; the first contained alias wins.
CUISINE_ALIASES: dict[str, str] = {
    "north indian": "North Indian",
    "punjabi": "North Indian",
    "south indian": "South Indian",
    "tamil": "South Indian",
    "bengali": "Bengali",
    "gujarati": "Gujarati",
    "maharashtrian": "Maharashtrian",
    "marathi": "Maharashtrian",
    "kerala": "Malayali",
    "malayali": "Malayali",
    "andhra": "Andhra",
    "telugu": "Andhra",
    "odia": "Odia",
    "oriya": "Odia",
    "rajasthani": "Rajasthani",
    "bihari": "Bihari",
    "northeastern": "North-Eastern",
    "north eastern": "North-Eastern",
    "assamese": "North-Eastern",
    "kashmiri": "Kashmiri",
    "snacks": "Snacks",
}

FALLBACK_CUISINE = "North Indian"
DEFAULT_MEAL_TIME = "lunch"
DEFAULT_TARGET_CALORIES = 500

MAX_CALORIES = 5000
RANGE_CEILING = 2000
CALORIE_MISMATCH_TOLERANCE = 50

MEALS_PER_SLOT = 5
ATTEMPTS_PER_CUISINE = 10
